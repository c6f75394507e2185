"""
Form schema: the static table of fields the engine manages.

The set of paths is fixed when a ``FormSchema`` is built and never grows.
``IDENTIFICATION_SCHEMA`` is the identification form (personal data +
address); other forms can be declared the same way.
"""

from typing import Iterable, Iterator

from idform.errors import UnknownPathError
from idform.models.field_spec import FieldSpec, StateOption
from idform.validation import (
    validate_curp,
    validate_letters,
    validate_rfc,
    validate_short_alphanumeric,
    validate_small_number,
)


class FormSchema:
    """Ordered, immutable collection of field declarations keyed by path."""

    def __init__(self, fields: Iterable[FieldSpec]):
        specs: dict[str, FieldSpec] = {}
        for spec in fields:
            if spec.path in specs:
                raise ValueError(f"Duplicate field path: {spec.path!r}")
            specs[spec.path] = spec
        self._specs = specs

    def __contains__(self, path: object) -> bool:
        return path in self._specs

    def __iter__(self) -> Iterator[FieldSpec]:
        return iter(self._specs.values())

    def __len__(self) -> int:
        return len(self._specs)

    @property
    def paths(self) -> tuple[str, ...]:
        return tuple(self._specs)

    @property
    def required_paths(self) -> tuple[str, ...]:
        return tuple(path for path, spec in self._specs.items() if spec.required)

    @property
    def groups(self) -> dict[str, list[str]]:
        """Group name -> field names, in declaration order."""
        result: dict[str, list[str]] = {}
        for spec in self._specs.values():
            result.setdefault(spec.group, []).append(spec.name)
        return result

    def spec(self, path: str) -> FieldSpec:
        """Get the declaration for ``path``; raises UnknownPathError if undeclared."""
        try:
            return self._specs[path]
        except KeyError:
            raise UnknownPathError(path) from None


MEXICAN_STATES = [
    StateOption(code="CH", name="Chihuahua"),
    StateOption(code="DF", name="Distrito Federal"),
    StateOption(code="NL", name="Nuevo Leon"),
    StateOption(code="SLP", name="San Luis Potosi"),
    StateOption(code="SON", name="Sonora"),
    StateOption(code="TAMPS", name="Tamaulipas"),
    StateOption(code="ZAC", name="Zacatecas"),
    StateOption(code="COAH", name="Coahuila"),
    StateOption(code="GTO", name="Guanajuato"),
    StateOption(code="JAL", name="Jalisco"),
    StateOption(code="MEX", name="Mexico"),
    StateOption(code="MOR", name="Morelos"),
    StateOption(code="NAY", name="Nayarit"),
    StateOption(code="OAX", name="Oaxaca"),
    StateOption(code="PUE", name="Puebla"),
    StateOption(code="QRO", name="Queretaro"),
]


IDENTIFICATION_SCHEMA = FormSchema([
    # Personal data
    FieldSpec(path="userInfo.firstName", label="Nombre", validator=validate_letters),
    FieldSpec(path="userInfo.middleName", label="Primer Apellido", validator=validate_letters),
    FieldSpec(path="userInfo.lastName", label="Segundo Apellido", required=False, validator=validate_letters),
    FieldSpec(path="userInfo.curp", label="CURP", validator=validate_curp),
    FieldSpec(path="userInfo.rfc", label="RFC", validator=validate_rfc),
    # Address
    FieldSpec(path="address.street", label="Street"),
    FieldSpec(path="address.zipCode", label="Postal Code", validator=validate_small_number),
    FieldSpec(path="address.externalNumber", label="External Number", validator=validate_small_number),
    FieldSpec(
        path="address.internalNumber",
        label="Internal Number",
        required=False,
        validator=validate_short_alphanumeric,
    ),
    FieldSpec(path="address.state", label="State", widget="select", options=MEXICAN_STATES),
    FieldSpec(path="address.province", label="Province", validator=validate_letters),
    FieldSpec(path="address.neighborhood", label="Neighborhood", validator=validate_letters),
])
