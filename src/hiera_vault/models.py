"""Base Pydantic models for hiera-vault.

This module provides the base model class that all hiera-vault Pydantic models
inherit from. It establishes consistent configuration across all models:

- Unknown keys are ignored, so a host can pass its whole option bag
- Immutable instances, safe to share between concurrent lookups

Example:
    >>> from hiera_vault.models import HieraVaultBaseModel
    >>>
    >>> class MyModel(HieraVaultBaseModel):
    ...     name: str
    >>>
    >>> MyModel(name="test", unrelated="ignored").model_dump()
    {'name': 'test'}
"""

from pydantic import BaseModel, ConfigDict


class HieraVaultBaseModel(BaseModel):
    """Base model for all hiera-vault Pydantic models.

    - extra="ignore": Drops any fields not defined in the model
    - frozen=True: Makes instances immutable for thread safety
    """

    model_config = ConfigDict(extra="ignore", frozen=True)
