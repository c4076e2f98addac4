"""
Schemas
File: record.py

Purpose: A completed record, one fixed-width token per catalog field,
stored in catalog order. Records are immutable once built.
"""

from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .catalog import DEFAULT_CATALOG, FieldCatalog
from .errors import (
    FieldNotFoundException,
    MissingFieldException,
    SchemaValidationException,
)


class Record(BaseModel):
    """
    Concrete field -> token assignment for one commitment.

    Tokens are held as a tuple aligned with catalog.field_names, so the
    record cannot be mutated after validation.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    catalog: FieldCatalog = Field(
        default=DEFAULT_CATALOG,
        description="Catalog defining the record shape",
    )
    tokens: tuple[str, ...] = Field(
        ...,
        description="Fixed-width tokens in catalog order",
    )

    @model_validator(mode="after")
    def _check_tokens(self) -> "Record":
        names = self.catalog.field_names
        if len(self.tokens) < len(names):
            missing = names[len(self.tokens)]
            raise MissingFieldException(
                f"Record has no value for field {missing!r}",
                field_name=missing,
            )
        if len(self.tokens) > len(names):
            raise SchemaValidationException(
                f"Record has {len(self.tokens)} tokens for a catalog of {len(names)} fields",
                field_path="tokens",
            )
        width = self.catalog.token_width
        for name, token in zip(names, self.tokens):
            if len(token) != width:
                raise SchemaValidationException(
                    f"Token for field {name!r} has width {len(token)}, expected {width}",
                    field_path=name,
                    details={"width": len(token), "expected": width},
                )
        return self

    @classmethod
    def from_values(
        cls,
        values: Mapping[str, str],
        catalog: FieldCatalog = DEFAULT_CATALOG,
    ) -> "Record":
        """
        Build a record from a field -> token mapping.

        Raises:
            FieldNotFoundException: If a key is not a catalog field
            MissingFieldException: If a catalog field has no value
            SchemaValidationException: If a token has the wrong width
        """
        for name in values:
            if not catalog.contains(name):
                raise FieldNotFoundException(name)
        tokens: list[str] = []
        for name in catalog.field_names:
            if name not in values or values[name] is None:
                raise MissingFieldException(
                    f"Record has no value for field {name!r}",
                    field_name=name,
                )
            tokens.append(values[name])
        return cls(catalog=catalog, tokens=tuple(tokens))

    def value(self, field_name: str) -> str:
        """Token stored for a field."""
        return self.tokens[self.catalog.position(field_name)]

    def as_dict(self) -> dict[str, str]:
        """Field -> token mapping in catalog order."""
        return dict(zip(self.catalog.field_names, self.tokens))

    def replace(self, field_name: str, token: str) -> "Record":
        """Return a new record with one field's token replaced."""
        self.catalog.position(field_name)
        values = self.as_dict()
        values[field_name] = token
        return Record.from_values(values, catalog=self.catalog)


__all__ = ["Record"]
