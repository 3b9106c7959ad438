import threading

import pytest
from sqlalchemy import select, text
from sqlalchemy.exc import OperationalError

from helpers import count_rows, get_item
from qmedic.core.action_context import ActionContext
from qmedic.core.database import begin_read_only
from qmedic.models.history import ActionKind, InventoryHistory
from qmedic.services.action_service import apply_action
from qmedic.services.exceptions import TransactionFailure
from qmedic.services.item_service import list_items, lock_item_by_code


def _run_concurrently(session_factory, calls):
    """
    Run each (scan_code, action, quantity) in its own thread and session,
    released together by a barrier.
    """
    barrier = threading.Barrier(len(calls))
    results = []
    errors = []
    lock = threading.Lock()

    def worker(index, scan_code, action, quantity):
        context = ActionContext(user=f"Medic {index}", case_id=f"C2000{index}")
        with session_factory() as session:
            barrier.wait()
            try:
                result = apply_action(
                    session,
                    scan_code=scan_code,
                    action=action,
                    quantity=quantity,
                    context=context,
                )
            except Exception as e:  # surfaced to the test below
                with lock:
                    errors.append(e)
                return
            with lock:
                results.append(result)

    threads = [
        threading.Thread(target=worker, args=(i, *call)) for i, call in enumerate(calls)
    ]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=60)

    return results, errors


def test_concurrent_check_outs_on_same_item_serialize(session_factory, seed_item):
    seed_item("MED001", quantity=3, min_quantity=1)

    results, errors = _run_concurrently(
        session_factory,
        [
            ("MED001", ActionKind.CHECK_OUT, 2),
            ("MED001", ActionKind.CHECK_OUT, 2),
        ],
    )

    assert errors == []
    # One call saw 3 and left 1; the other saw that 1 and clamped to 0.
    assert sorted(r.new_quantity for r in results) == [0, 1]

    with session_factory() as session:
        assert get_item(session, "MED001").quantity == 0
        assert count_rows(session, InventoryHistory) == 2


def test_concurrent_check_ins_are_not_lost(session_factory, seed_item):
    seed_item("SUP002", quantity=0, min_quantity=5)

    results, errors = _run_concurrently(
        session_factory,
        [("SUP002", ActionKind.CHECK_IN, 1) for _ in range(6)],
    )

    assert errors == []
    assert sorted(r.new_quantity for r in results) == [1, 2, 3, 4, 5, 6]

    with session_factory() as session:
        assert get_item(session, "SUP002").quantity == 6


def test_actions_on_different_items_are_independent(session_factory, seed_item):
    seed_item("MED001", quantity=5, min_quantity=1)
    seed_item("EQP001", quantity=4, min_quantity=1)

    results, errors = _run_concurrently(
        session_factory,
        [
            ("MED001", ActionKind.USE, 2),
            ("EQP001", ActionKind.CHECK_IN, 3),
        ],
    )

    assert errors == []
    assert len(results) == 2

    with session_factory() as session:
        assert get_item(session, "MED001").quantity == 3
        assert get_item(session, "EQP001").quantity == 7
        users = set(session.execute(select(InventoryHistory.user)).scalars())
        assert users == {"Medic 0", "Medic 1"}


def test_lock_timeout_surfaces_as_transaction_failure(
    session_factory, impatient_session_factory, seed_item, context
):
    seed_item("MED001", quantity=5, min_quantity=1)

    holder = session_factory()
    try:
        assert lock_item_by_code(holder, "MED001") is not None

        with impatient_session_factory() as session:
            with pytest.raises(TransactionFailure):
                apply_action(
                    session,
                    scan_code="MED001",
                    action=ActionKind.USE,
                    quantity=2,
                    context=context,
                )
    finally:
        holder.rollback()
        holder.close()

    with session_factory() as session:
        assert get_item(session, "MED001").quantity == 5
        assert count_rows(session, InventoryHistory) == 0


def test_readers_do_not_wait_for_a_held_item_lock(
    session_factory, impatient_session_factory, seed_item
):
    seed_item("MED001", quantity=5, min_quantity=1)

    holder = session_factory()
    try:
        lock_item_by_code(holder, "MED001")

        with begin_read_only(impatient_session_factory()) as reader:
            assert [item.item_id for item in list_items(reader)] == ["MED001"]

        # A session that would write still queues behind the holder
        with impatient_session_factory() as writer:
            with pytest.raises(OperationalError):
                writer.execute(text("SELECT 1"))
    finally:
        holder.rollback()
        holder.close()
