"""Tests for sequence() generators and the sequence registry."""

import threading

from factorykit import (
    FactoryKitConfig,
    SequenceConfig,
    configure,
    create_factory,
    current_sequence_value,
    reset_sequence,
    sequence,
)
from factorykit.registry import get_sequence_registry


class TestSequence:
    def test_generates_incrementing_numbers(self):
        next_num = sequence(lambda n: n)

        assert [next_num(), next_num(), next_num()] == [1, 2, 3]

    def test_identity_without_transform(self):
        next_num = sequence()

        assert [next_num(), next_num()] == [1, 2]

    def test_transforms_values(self):
        next_id = sequence(lambda n: f"user-{n}")

        assert [next_id(), next_id(), next_id()] == ["user-1", "user-2", "user-3"]

    def test_custom_start(self):
        next_num = sequence(lambda n: n, start=100)

        assert [next_num(), next_num()] == [100, 101]

    def test_configured_start(self):
        configure(FactoryKitConfig(sequence=SequenceConfig(start=0)))
        next_num = sequence()

        assert [next_num(), next_num()] == [0, 1]

    def test_separate_counters_per_id(self):
        next_user = sequence(lambda n: f"user-{n}", id="users")
        next_product = sequence(lambda n: f"product-{n}", id="products")

        assert next_user() == "user-1"
        assert next_product() == "product-1"
        assert next_user() == "user-2"
        assert next_product() == "product-2"

    def test_auto_generated_ids_are_distinct(self):
        seq1 = sequence(lambda n: n)
        seq2 = sequence(lambda n: n)

        assert seq1.sequence_id != seq2.sequence_id
        assert [seq1(), seq1()] == [1, 2]
        assert [seq2(), seq2()] == [1, 2]

    def test_generators_sharing_an_id_share_the_counter(self):
        first = sequence(id="shared")
        second = sequence(lambda n: n * 10, id="shared")

        assert first() == 1
        assert second() == 20
        assert first() == 3

    def test_start_ignored_for_existing_counter(self):
        sequence(id="orders")()
        late = sequence(id="orders", start=500)

        assert late() == 2


class TestResetSequence:
    def test_reset_specific_id(self):
        next_user = sequence(lambda n: f"user-{n}", id="users")
        next_product = sequence(lambda n: f"product-{n}", id="products")
        next_user()
        next_product()

        reset_sequence("users")

        assert next_user() == "user-1"
        assert next_product() == "product-2"

    def test_reset_all(self):
        next_user = sequence(lambda n: f"user-{n}", id="users")
        next_product = sequence(lambda n: f"product-{n}", id="products")
        next_user()
        next_product()

        reset_sequence()

        assert next_user() == "user-1"
        assert next_product() == "product-1"

    def test_restarts_at_custom_start(self):
        next_num = sequence(lambda n: n, id="counter", start=100)
        next_num()
        next_num()

        reset_sequence("counter")

        assert next_num() == 100

    def test_reset_unknown_id_is_noop(self):
        reset_sequence("never-created")

        assert current_sequence_value("never-created") is None


class TestSequenceRegistry:
    def test_current_value_is_next_to_hand_out(self):
        next_num = sequence(id="peek", start=5)

        assert current_sequence_value("peek") == 5
        next_num()
        assert current_sequence_value("peek") == 6

    def test_contains(self):
        sequence(id="known")

        assert "known" in get_sequence_registry()
        assert "unknown" not in get_sequence_registry()

    def test_concurrent_calls_never_repeat(self):
        next_num = sequence(id="threads")
        results = []
        results_lock = threading.Lock()

        def worker():
            values = [next_num() for _ in range(200)]
            with results_lock:
                results.extend(values)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert sorted(results) == list(range(1, 1601))

    def test_sequence_in_factory_advances_per_build(self):
        factory = create_factory().define(
            {"email": sequence(lambda n: f"user{n}@example.com")}
        )

        emails = [u["email"] for u in factory.build_many(2)]

        assert emails == ["user1@example.com", "user2@example.com"]

    def test_overridden_sequence_field_still_advances(self):
        factory = create_factory().define({"id": sequence()})

        factory.build(overrides={"id": 99})

        assert factory.build()["id"] == 2
