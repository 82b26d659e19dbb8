import re
from decimal import Decimal, ROUND_CEILING
from typing import Tuple

from kubernetes.utils import parse_quantity

DECIMAL_SI = 'DecimalSI'
BINARY_SI = 'BinarySI'
DECIMAL_EXPONENT = 'DecimalExponent'

QUANTITY_FORMATS = [DECIMAL_SI, BINARY_SI, DECIMAL_EXPONENT]

NANO = Decimal('1e-9')
MAX_DECIMAL_EXPONENT = 18
BINARY_SUFFIXES = ['', 'Ki', 'Mi', 'Gi', 'Ti', 'Pi', 'Ei']
DECIMAL_SUFFIXES = {
    -9: 'n',
    -6: 'u',
    -3: 'm',
    0: '',
    3: 'k',
    6: 'M',
    9: 'G',
    12: 'T',
    15: 'P',
    18: 'E',
}

EXPONENT_PATTERN = re.compile(r'[eE][+-]?\d+$')


def get_format(quantity: str) -> str:
    if quantity.endswith('i'):
        return BINARY_SI
    if EXPONENT_PATTERN.search(quantity) is not None:
        return DECIMAL_EXPONENT
    return DECIMAL_SI


def to_scaled_integer(value: Decimal) -> Tuple[int, int]:
    """
    Express a value as <mantissa> * 10^<exponent> where the mantissa is an integer and the exponent is a multiple
    of three, choosing the largest exponent possible.  Precision finer than nano units is rounded up.
    """
    if value.as_tuple().exponent < -9:
        value = value.quantize(NANO, rounding=ROUND_CEILING)

    sign, digits, exponent = value.normalize().as_tuple()
    mantissa = int(''.join(str(d) for d in digits))
    if sign:
        mantissa = -mantissa

    shift = exponent % 3
    mantissa *= 10 ** shift
    exponent -= shift

    while exponent > MAX_DECIMAL_EXPONENT:
        mantissa *= 1000
        exponent -= 3

    return mantissa, exponent


class Quantity:
    """
    A resource amount with Kubernetes quantity semantics.  Values are exact decimals, so "100m" + "50m" is "150m"
    rather than an approximation of 0.15 cores.
    """

    def __init__(self, value=0, fmt: str = DECIMAL_SI):
        if fmt not in QUANTITY_FORMATS:
            raise ValueError("Unknown quantity format: '{}'".format(fmt))

        value = Decimal(value)
        if not value.is_finite():
            raise ValueError("Quantity must be finite: '{}'".format(value))

        self.__value = value
        self.__format = fmt

    @staticmethod
    def parse(quantity: str) -> 'Quantity':
        quantity = str(quantity).strip()
        if len(quantity) == 0:
            raise ValueError("Empty quantity")

        # Kubernetes only accepts a lowercase kilo suffix
        if quantity.endswith('K'):
            raise ValueError("Invalid quantity suffix: '{}'".format(quantity))

        value = parse_quantity(quantity)
        if value < 0:
            raise ValueError("Resource usage can not be negative: '{}'".format(quantity))

        return Quantity(value, get_format(quantity))

    def get_value(self) -> Decimal:
        return self.__value

    def get_format(self) -> str:
        return self.__format

    def is_zero(self) -> bool:
        return self.__value == 0

    def milli_value(self) -> int:
        return int((self.__value * 1000).to_integral_value(rounding=ROUND_CEILING))

    def __add__(self, other):
        if not isinstance(other, Quantity):
            return NotImplemented

        # A zero quantity takes on the format of whatever is added to it
        fmt = other.get_format() if self.is_zero() else self.__format
        return Quantity(self.__value + other.get_value(), fmt)

    def __radd__(self, other):
        if other == 0:
            return self
        return NotImplemented

    def __eq__(self, other):
        if not isinstance(other, Quantity):
            return NotImplemented
        return self.__value == other.get_value()

    def __lt__(self, other):
        if not isinstance(other, Quantity):
            return NotImplemented
        return self.__value < other.get_value()

    def __hash__(self):
        return hash(self.__value)

    def __str__(self):
        if self.is_zero():
            return "0"

        if self.__format == BINARY_SI and self.__is_binary_representable():
            return self.__binary_str()

        mantissa, exponent = to_scaled_integer(self.__value)
        if self.__format == DECIMAL_EXPONENT:
            if exponent == 0:
                return str(mantissa)
            return "{}e{}".format(mantissa, exponent)

        return "{}{}".format(mantissa, DECIMAL_SUFFIXES[exponent])

    def __repr__(self):
        return "Quantity('{}', {})".format(self, self.__format)

    def __is_binary_representable(self) -> bool:
        # Small or fractional binary quantities are rendered in decimal notation
        if -1024 < self.__value < 1024:
            return False
        return self.__value == self.__value.to_integral_value()

    def __binary_str(self) -> str:
        number = int(self.__value)
        index = 0
        while number % 1024 == 0 and index < len(BINARY_SUFFIXES) - 1:
            number //= 1024
            index += 1

        return "{}{}".format(number, BINARY_SUFFIXES[index])


def zero_quantity() -> Quantity:
    return Quantity(0, DECIMAL_SI)
