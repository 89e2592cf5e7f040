"""Synthetic identifier generation for converted records.

Record ids and medical record numbers produced here are placeholders for test
and demo data. In production both would be assigned by the EHR. No collision
tracking is done across calls.
"""

import random
import string
import time
from typing import Optional

from fhir_intake.logging_audit import get_logger

logger = get_logger(__name__)

RECORD_ID_PREFIX = "patient"
RECORD_ID_SUFFIX_LENGTH = 9
RECORD_ID_ALPHABET = string.digits + string.ascii_lowercase

MRN_PREFIX = "MRN"
MRN_MIN = 100000
MRN_MAX = 999999


def generate_record_id(
    now_ms: Optional[int] = None, rng: Optional[random.Random] = None
) -> str:
    """Generate a resource id in patient-{epoch ms}-{random suffix} format.

    Args:
        now_ms: Timestamp in milliseconds since the epoch. Defaults to the
                current time.
        rng: Random generator to draw the suffix from. Defaults to the
             module-level generator; pass a seeded ``random.Random`` for
             reproducible ids.

    Returns:
        Record id, e.g. patient-1760000000000-k3j9x0a1b
    """
    if now_ms is None:
        now_ms = time.time_ns() // 1_000_000
    rng = rng or random

    suffix = "".join(
        rng.choice(RECORD_ID_ALPHABET) for _ in range(RECORD_ID_SUFFIX_LENGTH)
    )
    record_id = f"{RECORD_ID_PREFIX}-{now_ms}-{suffix}"
    logger.debug(f"Generated record ID: {record_id}")
    return record_id


def generate_mrn(rng: Optional[random.Random] = None) -> str:
    """Generate a medical record number in MRN{6 digits} format.

    Args:
        rng: Random generator. Defaults to the module-level generator.

    Returns:
        MRN string with a number in [100000, 999999], e.g. MRN482913
    """
    rng = rng or random
    return f"{MRN_PREFIX}{rng.randint(MRN_MIN, MRN_MAX)}"
