"""Library configuration using Pydantic Settings."""

import codecs

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from hl7kit.common.constants import DEFAULT_CHARSET


class HL7KitConfig(BaseSettings):
    """Configuration loaded from ``HL7KIT_*`` environment variables."""

    llp_max_length: int = Field(default=1_048_576, ge=0)
    default_charset: str = DEFAULT_CHARSET
    file_charset: str = DEFAULT_CHARSET

    model_config = {"env_prefix": "HL7KIT_", "case_sensitive": False}

    @field_validator("default_charset", "file_charset")
    @classmethod
    def check_codec(cls, value: str) -> str:
        """Reject encodings Python does not know."""
        try:
            codecs.lookup(value)
        except LookupError as e:
            raise ValueError(f"unknown character encoding: {value}") from e
        return value


__all__ = ["HL7KitConfig"]
