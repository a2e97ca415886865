"""GSL Guest Stay Accounts Engine — Commands"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from core.commands.validator import (
    assert_aware_datetime,
    assert_identifier_segment,
    assert_not_empty_string,
    assert_positive_amount,
)
from engines.guest_stay_accounts.account import ACCOUNT_ID_SEPARATOR


@dataclass(frozen=True)
class CheckIn:
    guest_id: str
    room_id:  str
    now:      datetime

    def __post_init__(self):
        assert_identifier_segment(self.guest_id, "guest_id", ACCOUNT_ID_SEPARATOR)
        assert_identifier_segment(self.room_id, "room_id", ACCOUNT_ID_SEPARATOR)
        assert_aware_datetime(self.now, "now")


@dataclass(frozen=True)
class RecordCharge:
    guest_stay_account_id: str
    charge_id:             str
    amount:                Decimal
    now:                   datetime

    def __post_init__(self):
        assert_not_empty_string(self.guest_stay_account_id, "guest_stay_account_id")
        assert_not_empty_string(self.charge_id, "charge_id")
        object.__setattr__(self, "amount", assert_positive_amount(self.amount))
        assert_aware_datetime(self.now, "now")


@dataclass(frozen=True)
class RecordPayment:
    guest_stay_account_id: str
    payment_id:            str
    amount:                Decimal
    now:                   datetime

    def __post_init__(self):
        assert_not_empty_string(self.guest_stay_account_id, "guest_stay_account_id")
        assert_not_empty_string(self.payment_id, "payment_id")
        object.__setattr__(self, "amount", assert_positive_amount(self.amount))
        assert_aware_datetime(self.now, "now")


@dataclass(frozen=True)
class CheckOut:
    guest_stay_account_id: str
    now:                   datetime

    def __post_init__(self):
        assert_not_empty_string(self.guest_stay_account_id, "guest_stay_account_id")
        assert_aware_datetime(self.now, "now")
