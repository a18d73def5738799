"""Field Type Tags.

Every bindable field carries one of these tags. Integer tags know their
signedness and inclusive range so the coercer can reject overflow.
"""

from enum import Enum


class TypeTag(str, Enum):
    """Supported field types."""

    TEXT = "text"
    CHAR = "char"
    BOOL = "bool"
    I8 = "i8"
    I16 = "i16"
    I32 = "i32"
    I64 = "i64"
    I128 = "i128"
    U8 = "u8"
    U16 = "u16"
    U32 = "u32"
    U64 = "u64"
    U128 = "u128"
    F32 = "f32"
    F64 = "f64"

    @property
    def is_integer(self) -> bool:
        return self in _INTEGER_WIDTHS

    @property
    def is_signed(self) -> bool:
        return self.value.startswith("i")

    @property
    def is_float(self) -> bool:
        return self in (TypeTag.F32, TypeTag.F64)

    @property
    def bits(self) -> int | None:
        """Bit width for integer and float tags, None otherwise."""
        if self.is_integer:
            return _INTEGER_WIDTHS[self]
        if self.is_float:
            return int(self.value[1:])
        return None

    @property
    def bounds(self) -> tuple[int, int]:
        """Inclusive (min, max) for an integer tag."""
        if not self.is_integer:
            raise ValueError(f"{self.value} is not an integer type")
        bits = _INTEGER_WIDTHS[self]
        if self.is_signed:
            return -(1 << (bits - 1)), (1 << (bits - 1)) - 1
        return 0, (1 << bits) - 1


_INTEGER_WIDTHS = {
    TypeTag.I8: 8,
    TypeTag.I16: 16,
    TypeTag.I32: 32,
    TypeTag.I64: 64,
    TypeTag.I128: 128,
    TypeTag.U8: 8,
    TypeTag.U16: 16,
    TypeTag.U32: 32,
    TypeTag.U64: 64,
    TypeTag.U128: 128,
}
