"""
Identity Model - What the identity provider tells us about the signed-in user.
"""

from typing import Optional
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class Identity(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    display_name: Optional[str] = None
    is_authenticated: bool = False
