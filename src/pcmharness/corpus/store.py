"""
Append-only on-disk corpus of failing test cases.

Records are files named case_<N>.bin in a single directory. N is the number
of records present when the case is written; records are never overwritten
or removed by the harness.
"""

import os
import re

from pcmharness.corpus.codec import decode_case, encode_case
from pcmharness.errors import CorpusError
from pcmharness.io.save_artifacts import ensure_dir
from pcmharness.tracer import get_tracer, trace

DEFAULT_CORPUS_DIR = "testdata"

_RECORD_NAME = re.compile(r"^case_(\d+)\.bin$")


def record_name(index):
    """File name of the record with the given index."""
    return f"case_{index}.bin"


def list_cases(directory=DEFAULT_CORPUS_DIR):
    """
    List record paths in the corpus directory, ordered by record index.

    Raises FileNotFoundError if the directory does not exist.
    """
    records = []
    with os.scandir(directory) as entries:
        for entry in entries:
            match = _RECORD_NAME.match(entry.name)
            if match and entry.is_file():
                records.append((int(match.group(1)), entry.path))

    return [path for _, path in sorted(records)]


@trace(label="persist_case")
def persist_case(case, directory=DEFAULT_CORPUS_DIR):
    """
    Write a test case to the corpus as a new record.

    The directory is created if needed. The record index starts at the
    current record count and moves past any name already taken, so an
    existing record is never replaced.

    Returns the path of the new record.
    """
    tracer = get_tracer()

    data = encode_case(case)
    ensure_dir(directory)

    index = len(list_cases(directory))
    path = os.path.join(directory, record_name(index))
    while os.path.exists(path):
        index += 1
        path = os.path.join(directory, record_name(index))

    with open(path, "xb") as f:
        f.write(data)

    tracer.event(f"Persisted case: {path}")

    return path


@trace(label="load_cases")
def load_cases(directory=DEFAULT_CORPUS_DIR):
    """
    Load every record in the corpus, in listing order.

    Any unreadable or undecodable record fails the whole load.
    """
    tracer = get_tracer()

    cases = []
    for path in list_cases(directory):
        with open(path, "rb") as f:
            data = f.read()
        try:
            cases.append(decode_case(data))
        except CorpusError as e:
            raise CorpusError(f"{path}: {e}") from e

    tracer.event(f"Loaded {len(cases)} cases from {directory}")

    return cases
