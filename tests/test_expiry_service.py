from datetime import date, timedelta

import pytest
from sqlalchemy import select

from helpers import count_rows
from qmedic.models.alert import AlertType, NotificationLog
from qmedic.models.history import ActionKind
from qmedic.services.action_service import apply_action
from qmedic.services.expiry_service import expiry_alerts_due, run_expiry_scan

TODAY = date(2026, 3, 1)


@pytest.mark.parametrize(
    "days_left,expected",
    [
        (16, []),
        (15, [AlertType.EXPIRY_15_DAY]),
        (14, []),
        (8, []),
        (7, [AlertType.EXPIRY_7_DAY]),
        (1, [AlertType.EXPIRY_7_DAY]),
        (0, []),
        (-3, []),
    ],
)
def test_expiry_alerts_due(days_left, expected):
    assert expiry_alerts_due(days_left) == expected


def test_fifteen_day_warning_is_logged_once(db, seed_item):
    seed_item("MED001", expiry_date=TODAY + timedelta(days=15))

    first = run_expiry_scan(db, today=TODAY)
    second = run_expiry_scan(db, today=TODAY)

    assert first.items_checked == 1
    assert first.alerts_created == 1
    assert second.alerts_created == 0

    alert = db.execute(select(NotificationLog)).scalar_one()
    assert alert.alert_type is AlertType.EXPIRY_15_DAY
    assert alert.expiry_date_at_alert == TODAY + timedelta(days=15)
    assert alert.details == "Expires in 15 days"


def test_seven_day_warning_is_logged_once_across_days(db, seed_item):
    seed_item("MED002", expiry_date=TODAY + timedelta(days=7))

    run_expiry_scan(db, today=TODAY)
    run_expiry_scan(db, today=TODAY + timedelta(days=1))
    run_expiry_scan(db, today=TODAY + timedelta(days=3))

    alerts = list(db.execute(select(NotificationLog)).scalars())
    assert [a.alert_type for a in alerts] == [AlertType.EXPIRY_7_DAY]
    assert alerts[0].details == "Expires in 7 days"


def test_item_gets_both_warnings_over_time(db, seed_item):
    seed_item("MED001", expiry_date=TODAY + timedelta(days=15))

    run_expiry_scan(db, today=TODAY)
    run_expiry_scan(db, today=TODAY + timedelta(days=10))

    kinds = set(db.execute(select(NotificationLog.alert_type)).scalars())
    assert kinds == {AlertType.EXPIRY_15_DAY, AlertType.EXPIRY_7_DAY}


def test_items_without_expiry_or_already_expired_are_ignored(db, seed_item):
    seed_item("EQP002", expiry_date=None)
    seed_item("SUP001", expiry_date=TODAY)
    seed_item("SUP002", expiry_date=TODAY - timedelta(days=2))

    result = run_expiry_scan(db, today=TODAY)

    assert result.items_checked == 2
    assert result.alerts_created == 0
    assert count_rows(db, NotificationLog) == 0


def test_low_stock_alerts_do_not_suppress_expiry_warnings(db, seed_item, context):
    seed_item("MED001", quantity=3, min_quantity=3, expiry_date=TODAY + timedelta(days=5))
    apply_action(db, scan_code="MED001", action=ActionKind.USE, quantity=1, context=context)

    result = run_expiry_scan(db, today=TODAY)

    assert result.alerts_created == 1
    kinds = sorted(a.value for a in db.execute(select(NotificationLog.alert_type)).scalars())
    assert kinds == ["7-Day Expiry Warning", "Low Stock"]
