"""Reusable, strict base models."""

from typing import Self

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """
    A base model that converts field names to camel case when serializing.

    For example, the field name `confirmed_height` in a Python model will be
    represented as `confirmedHeight` when it is serialized to JSON.

    The JSON form doubles as the canonical encoding of relay state handed to
    the external committing layer.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_default=True,
        arbitrary_types_allowed=True,
    )

    def encode_bytes(self) -> bytes:
        """
        Return the canonical byte encoding of the model.

        Fields are emitted in declaration order with camelCase keys and no
        insignificant whitespace, so equal models always encode identically.
        """
        return self.model_dump_json(by_alias=True).encode("utf-8")

    @classmethod
    def decode_bytes(cls, data: bytes) -> Self:
        """Parse a model previously produced by `encode_bytes`."""
        return cls.model_validate_json(data)


class StrictBaseModel(CamelModel):
    """A strict, immutable pydantic base model."""

    model_config = CamelModel.model_config | {
        "extra": "forbid",
        "frozen": True,
        "strict": True,
    }
