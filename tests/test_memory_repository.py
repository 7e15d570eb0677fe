"""Tests for InMemoryTaskRepository under concurrent use."""

import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from taskboard.exceptions import NotFoundError, StorageError
from taskboard.repository import InMemoryTaskRepository


class TestInMemoryConcurrency:
    """Locking guarantees of the in-memory backend."""

    def test_concurrent_creates_get_distinct_ids(self) -> None:
        """Parallel creates never collide."""
        repository = InMemoryTaskRepository()
        with ThreadPoolExecutor(max_workers=8) as pool:
            tasks = list(pool.map(lambda i: repository.create(title=f"t{i}"), range(200)))
        assert len({task.id for task in tasks}) == 200
        assert len(repository) == 200

    def test_delete_racing_update_is_all_or_nothing(self) -> None:
        """Either the update lands before the delete or it sees NotFoundError."""
        for _ in range(50):
            repository = InMemoryTaskRepository()
            task = repository.create(title="race")
            barrier = threading.Barrier(2)
            outcomes: dict[str, object] = {}

            def do_update() -> None:
                barrier.wait()
                try:
                    outcomes["update"] = repository.update(task.id, completed=True)
                except NotFoundError as e:
                    outcomes["update"] = e

            def do_delete() -> None:
                barrier.wait()
                repository.delete(task.id)

            threads = [threading.Thread(target=do_update), threading.Thread(target=do_delete)]
            for thread in threads:
                thread.start()
            for thread in threads:
                thread.join()

            assert len(repository) == 0
            with pytest.raises(NotFoundError):
                repository.get(task.id)

    def test_duplicate_id_is_storage_error(self) -> None:
        """A broken id factory cannot overwrite an existing task."""
        repository = InMemoryTaskRepository(id_factory=lambda: "cfixed")
        repository.create(title="first")
        with pytest.raises(StorageError):
            repository.create(title="second")
        assert repository.get("cfixed").title == "first"
