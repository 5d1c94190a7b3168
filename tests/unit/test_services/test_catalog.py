"""Unit tests for the option catalog."""
import threading
from concurrent.futures import ThreadPoolExecutor

import pytest
from unittest.mock import Mock
from sqlalchemy.exc import IntegrityError, OperationalError

from ballotbox.core.constants import DEFAULT_VOTE_OPTIONS
from ballotbox.core.exceptions import SeedFailure
from ballotbox.db import Database
from ballotbox.db.models import Option, Tally
from ballotbox.services.catalog import count_options, list_options, seed_options


@pytest.mark.unit
class TestSeedOptions:
    """Test seed_options function."""

    def test_seeds_empty_catalog_with_sequential_ids(self, empty_database):
        with empty_database.session() as db:
            assert seed_options(db, DEFAULT_VOTE_OPTIONS) is True

            options = list_options(db)
            assert [o.id for o in options] == [1, 2, 3, 4, 5]
            assert [o.name for o in options] == list(DEFAULT_VOTE_OPTIONS)

    def test_every_option_gets_a_zero_tally(self, empty_database):
        with empty_database.session() as db:
            seed_options(db, ["Yes", "No"])

            tallies = db.query(Tally).order_by(Tally.option_id).all()
            assert [(t.option_id, t.count) for t in tallies] == [(1, 0), (2, 0)]

    def test_second_seed_is_a_no_op(self, empty_database):
        """Running startup seeding twice yields the same rows as running it once."""
        with empty_database.session() as db:
            seed_options(db, DEFAULT_VOTE_OPTIONS)
            first = [(o.id, o.name) for o in list_options(db)]

        with empty_database.session() as db:
            assert seed_options(db, DEFAULT_VOTE_OPTIONS) is False
            assert [(o.id, o.name) for o in list_options(db)] == first
            assert db.query(Tally).count() == len(first)

    def test_existing_catalog_is_not_reset_or_extended(self, empty_database):
        with empty_database.session() as db:
            seed_options(db, ["A", "B"])
            db.query(Tally).filter(Tally.option_id == 1).update({Tally.count: 7})
            db.commit()

        with empty_database.session() as db:
            assert seed_options(db, ["A", "B", "C"]) is False
            assert count_options(db) == 2
            assert db.get(Tally, 1).count == 7

    def test_names_are_stripped(self, empty_database):
        with empty_database.session() as db:
            seed_options(db, ["  Uno ", "Dos"])
            assert db.get(Option, 1).name == "Uno"

    @pytest.mark.parametrize("names", [[], ["A", "A"], ["A", ""], ["A", "   "], ["A", None]])
    def test_unusable_names_fail_before_touching_storage(self, names):
        mock_db = Mock()

        with pytest.raises(SeedFailure):
            seed_options(mock_db, names)

        mock_db.add.assert_not_called()
        mock_db.commit.assert_not_called()

    def test_commit_failure_rolls_back_everything(self, empty_database, monkeypatch):
        """A failed seed leaves no partial rows."""
        with empty_database.session() as db:
            def failing_commit():
                db.flush()
                raise OperationalError("COMMIT", {}, Exception("disk I/O error"))

            monkeypatch.setattr(db, "commit", failing_commit)

            with pytest.raises(SeedFailure, match="disk I/O error"):
                seed_options(db, DEFAULT_VOTE_OPTIONS)

        with empty_database.session() as db:
            assert count_options(db) == 0
            assert db.query(Tally).count() == 0

    def test_failure_is_chained_to_storage_error(self):
        mock_db = Mock()
        mock_db.query.return_value.scalar.return_value = 0
        error = OperationalError("COMMIT", {}, Exception("database is locked"))
        mock_db.commit.side_effect = error

        with pytest.raises(SeedFailure) as exc_info:
            seed_options(mock_db, ["A"])

        assert exc_info.value.__cause__ is error
        mock_db.rollback.assert_called_once()

    def test_losing_a_concurrent_seed_reports_already_seeded(self):
        mock_db = Mock()
        # Empty when checked, seeded by another process by the time we commit
        mock_db.query.return_value.scalar.side_effect = [0, 5]
        mock_db.commit.side_effect = IntegrityError(
            "INSERT", {}, Exception("UNIQUE constraint failed: options.id")
        )

        assert seed_options(mock_db, DEFAULT_VOTE_OPTIONS) is False
        mock_db.rollback.assert_called_once()

    def test_other_integrity_errors_still_fail(self):
        mock_db = Mock()
        mock_db.query.return_value.scalar.return_value = 0
        mock_db.commit.side_effect = IntegrityError(
            "INSERT", {}, Exception("CHECK constraint failed: ck_options_name_not_empty")
        )

        with pytest.raises(SeedFailure):
            seed_options(mock_db, ["A"])

    def test_concurrent_seeders_all_succeed(self, empty_database):
        """Workers starting together on a fresh store agree on one catalog."""
        workers = 8
        barrier = threading.Barrier(workers)
        handles = [Database(empty_database.url) for _ in range(workers)]

        def seed(handle):
            with handle.session() as db:
                barrier.wait()
                return seed_options(db, DEFAULT_VOTE_OPTIONS)

        try:
            with ThreadPoolExecutor(max_workers=workers) as executor:
                outcomes = list(executor.map(seed, handles))
        finally:
            for handle in handles:
                handle.dispose()

        assert outcomes.count(True) == 1
        assert outcomes.count(False) == workers - 1
        with empty_database.session() as db:
            assert [o.name for o in list_options(db)] == list(DEFAULT_VOTE_OPTIONS)
            assert db.query(Tally).count() == len(DEFAULT_VOTE_OPTIONS)


@pytest.mark.unit
class TestCatalogQueries:
    """Test read helpers."""

    def test_count_options(self, db_session):
        assert count_options(db_session) == len(DEFAULT_VOTE_OPTIONS)

    def test_count_options_on_empty_catalog(self, empty_database):
        with empty_database.session() as db:
            assert count_options(db) == 0
