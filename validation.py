# validation.py
"""
Input checks that run before anything reaches the cache.
Block count and associativity must fit an unsigned 16-bit field, data values
a signed 16-bit field.
"""

MAX_GEOMETRY = 0xFFFF
MAX_DATA_VALUE = 0x7FFF

BLOCKS_ERROR = "Blocks amount must be positive and a multiple of 2"
ASSOCIATIVITY_ERROR = "Set associativity must be positive and a multiple of 2"
DATA_ERROR = f"Data must be an integer between 0 and {MAX_DATA_VALUE}"


class ValidationError(ValueError):
    def __init__(self, message):
        super().__init__(message)
        self.message = message


def _parse_int(text, message):
    try:
        return int(str(text).strip())
    except ValueError:
        raise ValidationError(message) from None


def _parse_even(text, message):
    n = _parse_int(text, message)
    if n <= 0 or n % 2 or n > MAX_GEOMETRY:
        raise ValidationError(message)
    return n


def parse_block_count(text):
    return _parse_even(text, BLOCKS_ERROR)


def parse_associativity(text):
    return _parse_even(text, ASSOCIATIVITY_ERROR)


def check_geometry(blocks, associativity):
    """Associativity must be no larger than, and evenly divide, the block count."""
    if associativity > blocks or blocks % associativity:
        raise ValidationError(
            f"Set associativity ({associativity}) must evenly divide the blocks amount ({blocks})"
        )
    return blocks // associativity


def parse_data_value(text):
    n = _parse_int(text, DATA_ERROR)
    if n < 0 or n > MAX_DATA_VALUE:
        raise ValidationError(DATA_ERROR)
    return n


def parse_yes_no(text):
    return str(text).strip()[:1] in ("y", "Y")
