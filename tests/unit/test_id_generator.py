"""Unit tests for synthetic identifier generation."""

import random
import re

from fhir_intake.intake.id_generator import (
    MRN_MAX,
    MRN_MIN,
    MRN_PREFIX,
    RECORD_ID_PREFIX,
    generate_mrn,
    generate_record_id,
)


class TestGenerateRecordId:
    """Test suite for generate_record_id function."""

    def test_record_id_format(self):
        """Test that generated ID matches patient-{ms}-{9 alphanumerics}."""
        # Act
        record_id = generate_record_id()

        # Assert
        assert re.fullmatch(rf"{RECORD_ID_PREFIX}-\d{{13}}-[0-9a-z]{{9}}", record_id), (
            f"ID {record_id} does not match expected format"
        )

    def test_record_id_embeds_timestamp(self):
        record_id = generate_record_id(now_ms=1760000000123)

        assert record_id.startswith("patient-1760000000123-")

    def test_record_ids_differ_for_same_timestamp(self):
        """Test random suffix makes ids unique within one millisecond."""
        # Act
        ids = {generate_record_id(now_ms=1760000000000) for _ in range(1000)}

        # Assert
        assert len(ids) == 1000, "Generated IDs contain duplicates"

    def test_seeded_rng_is_reproducible(self):
        """Test same seed produces the same id sequence."""
        # Act
        ids1 = [generate_record_id(now_ms=1, rng=random.Random(42)) for _ in range(3)]
        ids2 = [generate_record_id(now_ms=1, rng=random.Random(42)) for _ in range(3)]

        # Assert
        assert ids1 == ids2


class TestGenerateMrn:
    """Test suite for generate_mrn function."""

    def test_mrn_format(self):
        mrn = generate_mrn()

        assert re.fullmatch(rf"{MRN_PREFIX}\d{{6}}", mrn)

    def test_mrn_range(self):
        """Test numbers stay within [100000, 999999] over many draws."""
        # Act
        numbers = [int(generate_mrn()[len(MRN_PREFIX):]) for _ in range(5000)]

        # Assert
        assert all(MRN_MIN <= n <= MRN_MAX for n in numbers)

    def test_mrn_range_bounds_reachable(self):
        """Test both inclusive bounds can be produced."""

        class BoundRandom(random.Random):
            def __init__(self, pick_max):
                super().__init__()
                self.pick_max = pick_max

            def randint(self, a, b):
                return b if self.pick_max else a

        assert generate_mrn(rng=BoundRandom(False)) == "MRN100000"
        assert generate_mrn(rng=BoundRandom(True)) == "MRN999999"

    def test_mrns_vary(self):
        mrns = {generate_mrn() for _ in range(100)}

        assert len(mrns) > 1
