# geometry.py
import collections

MAX_CACHE_SETS = 8192
MAX_ASSOCIATIVITY = 8
MIN_LINE_SIZE = 8
MAX_LINE_SIZE = 64


class ConfigError(ValueError):
    """Raised when a cache geometry is not usable."""

    def __init__(self, field, value, message):
        super().__init__(message)
        self.field = field
        self.value = value


class OutOfRangeError(ConfigError):
    pass


class NotPowerOfTwoError(ConfigError):
    pass


def log2_int(n):
    """Integer log2: number of right shifts until n <= 1."""
    bits = 0
    while n > 1:
        n >>= 1
        bits += 1
    return bits


def is_power_of_two(n):
    return n > 0 and (n & (n - 1)) == 0


def _check_range(field, value, low, high, label, unit=""):
    if isinstance(value, bool) or not isinstance(value, int) or not low <= value <= high:
        raise OutOfRangeError(field, value, f"{label} must be {low}-{high}{unit}, got {value!r}")


def _check_power_of_two(field, value, label):
    if not is_power_of_two(value):
        raise NotPowerOfTwoError(field, value, f"{label} must be a power of 2, got {value}")


class GeometryConfig(collections.namedtuple("GeometryConfig", ["num_sets", "associativity", "line_size"])):
    """
    Shape of a set-associative cache.
    Construction validates the three dimensions, so an instance is always usable.
    Bit-field widths are derived from the dimensions on every read.
    """
    __slots__ = ()

    def __new__(cls, num_sets, associativity, line_size):
        # all range checks first, then power-of-two checks
        _check_range("num_sets", num_sets, 1, MAX_CACHE_SETS, "Number of sets")
        _check_range("associativity", associativity, 1, MAX_ASSOCIATIVITY, "Associativity")
        _check_range("line_size", line_size, MIN_LINE_SIZE, MAX_LINE_SIZE, "Line size", " bytes")
        _check_power_of_two("num_sets", num_sets, "Number of sets")
        _check_power_of_two("line_size", line_size, "Line size")
        return super().__new__(cls, num_sets, associativity, line_size)

    @classmethod
    def _make(cls, iterable):
        # _replace goes through _make; keep both on the validating path
        return cls(*iterable)

    @property
    def offset_bits(self):
        return log2_int(self.line_size)

    @property
    def index_bits(self):
        return log2_int(self.num_sets)

    @property
    def tag_shift(self):
        return self.offset_bits + self.index_bits

    @property
    def size_bytes(self):
        return self.num_sets * self.associativity * self.line_size

    def as_dict(self):
        return {
            "num_sets": self.num_sets,
            "associativity": self.associativity,
            "line_size": self.line_size,
            "offset_bits": self.offset_bits,
            "index_bits": self.index_bits,
            "size_bytes": self.size_bytes,
        }


def validate(num_sets, associativity, line_size):
    """
    Build a GeometryConfig from three integers.
    Raises OutOfRangeError or NotPowerOfTwoError naming the failed dimension.
    """
    return GeometryConfig(num_sets, associativity, line_size)
