"""
Binary record format for corpus cases.

Layout, all little-endian: for each of the two curves a u64 point count
followed by one (x: f64, y: f64) pair per point, then epsilon as f64.
"""

import numpy as np
from pydantic import ValidationError

from pcmharness.errors import CorpusError
from pcmharness.models import TestCase

COUNT_DTYPE = np.dtype("<u8")
FLOAT_DTYPE = np.dtype("<f8")


def encode_case(case):
    """Serialize a TestCase to bytes."""
    parts = []
    for curve in (case.primary_curve, case.secondary_curve):
        parts.append(np.array([len(curve)], dtype=COUNT_DTYPE).tobytes())
        parts.append(np.ascontiguousarray(curve, dtype=FLOAT_DTYPE).tobytes())
    parts.append(np.array([case.epsilon], dtype=FLOAT_DTYPE).tobytes())
    return b"".join(parts)


def decode_case(data):
    """
    Deserialize bytes produced by encode_case.

    Raises CorpusError on truncated data, trailing bytes or values that do
    not form a valid TestCase.
    """
    offset = 0
    curves = []
    for _ in range(2):
        (count,), offset = _read(data, offset, COUNT_DTYPE, 1)
        if count > (len(data) - offset) // (2 * FLOAT_DTYPE.itemsize):
            raise CorpusError(f"Record declares {count} points but only {len(data) - offset} bytes remain")
        coords, offset = _read(data, offset, FLOAT_DTYPE, 2 * int(count))
        curves.append(coords.reshape(-1, 2))

    (epsilon,), offset = _read(data, offset, FLOAT_DTYPE, 1)
    if offset != len(data):
        raise CorpusError(f"Record has {len(data) - offset} trailing bytes")

    try:
        return TestCase(primary_curve=curves[0], secondary_curve=curves[1], epsilon=float(epsilon))
    except ValidationError as e:
        raise CorpusError(f"Record does not hold a valid case: {e}") from e


def _read(data, offset, dtype, count):
    end = offset + dtype.itemsize * count
    if end > len(data):
        raise CorpusError(f"Record truncated at byte {len(data)}, expected at least {end}")
    values = np.frombuffer(data, dtype=dtype, count=count, offset=offset)
    return values, end
