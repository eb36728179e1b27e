"""Money value object."""

from dataclasses import dataclass
from decimal import Decimal, DecimalException, InvalidOperation
from typing import Any

from .currency import CurrencyCode, minor_unit_exponent
from .resource import DecodingError, expect_object, parse_enum, require_field


@dataclass
class Money:
    """
    A monetary amount in a specific currency.

    `value` is the decimal display string the API returns (e.g. "-12.50");
    `value_in_base_units` is the same amount as an integer count of the
    currency's minor unit (e.g. -1250 cents). The two always agree.
    """

    currency_code: CurrencyCode
    value: str
    value_in_base_units: int

    @property
    def amount(self) -> Decimal:
        """The amount as a Decimal in major units."""
        return Decimal(self.value)

    def __str__(self) -> str:
        return f"{self.value} {self.currency_code.value}"

    @classmethod
    def from_dict(cls, raw: Any, path: str = "money") -> "Money":
        """Decode a Money object and check value against value_in_base_units."""
        obj = expect_object(raw, path)
        currency_code = parse_enum(
            CurrencyCode, require_field(obj, "currencyCode", str, path), f"{path}.currencyCode"
        )
        value = require_field(obj, "value", str, path)
        base_units = require_field(obj, "valueInBaseUnits", int, path)

        try:
            decimal_value = Decimal(value)
        except InvalidOperation as e:
            raise DecodingError(f"value {value!r} is not a decimal number", path) from e
        if not decimal_value.is_finite():
            raise DecodingError(f"value {value!r} is not a finite number", path)

        exponent = minor_unit_exponent(currency_code)
        if exponent is None:
            return cls(currency_code=currency_code, value=value, value_in_base_units=base_units)

        try:
            scaled = decimal_value.scaleb(exponent)
        except DecimalException as e:
            raise DecodingError(f"value {value!r} is out of range", path) from e
        if scaled != base_units:
            raise DecodingError(
                f"value {value!r} does not match valueInBaseUnits {base_units} "
                f"for {currency_code.value} (minor-unit exponent {exponent})",
                path,
            )

        return cls(currency_code=currency_code, value=value, value_in_base_units=base_units)

    def to_dict(self) -> dict[str, Any]:
        return {
            "currencyCode": self.currency_code.value,
            "value": self.value,
            "valueInBaseUnits": self.value_in_base_units,
        }


def optional_money(raw: dict[str, Any], key: str, path: str) -> Money | None:
    """Decode raw[key] as Money, or None when absent/null."""
    if raw.get(key) is None:
        return None
    return Money.from_dict(raw[key], f"{path}.{key}")


def required_money(raw: dict[str, Any], key: str, path: str) -> Money:
    """Decode raw[key] as Money; the key must be present."""
    if raw.get(key) is None:
        raise DecodingError(f"missing required field '{key}'", path)
    return Money.from_dict(raw[key], f"{path}.{key}")
