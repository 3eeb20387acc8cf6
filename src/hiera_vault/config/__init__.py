"""Option handling: models, validation and YAML loading."""

from .loader import load_lookup_options
from .models import LookupOptionsModel
from .validator import compile_confine_patterns, validate_options

__all__ = ["LookupOptionsModel", "compile_confine_patterns", "load_lookup_options", "validate_options"]
