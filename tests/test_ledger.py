"""Tests for budget_ledger.services.ledger: ownership, role gating, validation, update quirk."""

import unittest
from datetime import date
from decimal import Decimal

from budget_ledger.models import Transaction
from budget_ledger.services.errors import (
    ForbiddenError,
    InvalidReferenceError,
    NotFoundError,
    ValidationError,
)
from budget_ledger.services.ledger import (
    create_transaction,
    delete_transaction,
    get_transaction,
    list_transactions,
    update_transaction,
)
from support import add_category, add_user, make_database


class LedgerTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.database = make_database()
        self.db = self.database.session()
        self.user = add_user(self.db, role="user")
        self.other = add_user(self.db, role="user")
        self.admin = add_user(self.db, role="admin")
        self.read_only = add_user(self.db, role="read-only")
        self.groceries = add_category(self.db, "Groceries")
        self.salary = add_category(self.db, "Salary")

    def tearDown(self) -> None:
        self.db.close()
        self.database.dispose()

    def create(self, actor=None, **overrides) -> int:
        """Create a transaction and return the id of the newest row."""
        fields = {
            "category_id": self.groceries,
            "type": "expense",
            "amount": Decimal("42.50"),
            "date": date(2024, 3, 1),
            "description": "weekly shop",
        }
        fields.update(overrides)
        create_transaction(self.db, actor or self.user, **fields)
        return self.db.query(Transaction.id).order_by(Transaction.id.desc()).first()[0]


class TestCreate(LedgerTestCase):
    def test_create_returns_acknowledgment_and_sets_owner(self) -> None:
        message = create_transaction(
            self.db,
            self.user,
            category_id=self.groceries,
            type="expense",
            amount=Decimal("42.50"),
            date=date(2024, 3, 1),
        )
        self.assertEqual(message, "Transaction created.")
        row = self.db.query(Transaction).one()
        self.assertEqual(row.user_id, self.user.id)
        self.assertEqual(row.amount, Decimal("42.50"))
        self.assertEqual(row.description, "")

    def test_smallest_positive_amount_accepted(self) -> None:
        tx_id = self.create(amount=0.01)
        self.assertEqual(get_transaction(self.db, self.user, tx_id).amount, Decimal("0.01"))

    def test_zero_and_negative_amount_rejected(self) -> None:
        for amount in (0, Decimal("0"), -1, Decimal("-0.01"), "-5"):
            with self.subTest(amount=amount):
                with self.assertRaises(ValidationError):
                    self.create(amount=amount)
        self.assertEqual(self.db.query(Transaction).count(), 0)

    def test_non_numeric_or_sub_cent_amount_rejected(self) -> None:
        for amount in ("abc", "NaN", Decimal("1.005"), True):
            with self.subTest(amount=amount):
                with self.assertRaises(ValidationError):
                    self.create(amount=amount)

    def test_string_date_accepted_and_invalid_date_rejected(self) -> None:
        tx_id = self.create(date="2024-02-29")
        self.assertEqual(get_transaction(self.db, self.user, tx_id).date, date(2024, 2, 29))
        for bad in (
            "2023-02-29", "03/01/2024", 20240301, "20240301", "2024-W10-5", "2024-3-1"
        ):
            with self.subTest(date=bad):
                with self.assertRaises(ValidationError):
                    self.create(date=bad)

    def test_invalid_type_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            self.create(type="transfer")

    def test_missing_required_field_rejected(self) -> None:
        for field in ("category_id", "type", "amount", "date"):
            with self.subTest(field=field):
                with self.assertRaises(ValidationError):
                    self.create(**{field: None})

    def test_unknown_category_is_reference_error(self) -> None:
        with self.assertRaises(InvalidReferenceError):
            self.create(category_id=9999)
        self.assertEqual(self.db.query(Transaction).count(), 0)

    def test_read_only_cannot_create(self) -> None:
        with self.assertRaises(ForbiddenError):
            self.create(actor=self.read_only)

    def test_admin_can_create_own(self) -> None:
        tx_id = self.create(actor=self.admin)
        self.assertEqual(get_transaction(self.db, self.admin, tx_id).user_id, self.admin.id)


class TestRead(LedgerTestCase):
    def test_list_only_own_with_category_name(self) -> None:
        self.create()
        self.create(actor=self.other)
        rows = list_transactions(self.db, self.user)
        self.assertEqual(len(rows), 1)
        self.assertEqual(rows[0].category, "Groceries")
        self.assertEqual(rows[0].user_id, self.user.id)

    def test_list_ordered_by_date_desc_then_newest_insert(self) -> None:
        first = self.create(date=date(2024, 1, 10))
        second = self.create(date=date(2024, 3, 1))
        third = self.create(date=date(2024, 1, 10))
        ids = [t.id for t in list_transactions(self.db, self.user)]
        self.assertEqual(ids, [second, third, first])

    def test_list_empty_for_new_user(self) -> None:
        self.assertEqual(list_transactions(self.db, self.read_only), [])

    def test_get_other_users_transaction_not_found(self) -> None:
        tx_id = self.create(actor=self.other)
        with self.assertRaises(NotFoundError):
            get_transaction(self.db, self.user, tx_id)
        with self.assertRaises(NotFoundError):
            get_transaction(self.db, self.admin, tx_id)

    def test_get_missing_not_found(self) -> None:
        with self.assertRaises(NotFoundError):
            get_transaction(self.db, self.user, 12345)

    def test_read_only_reads_succeed(self) -> None:
        self.assertEqual(list_transactions(self.db, self.read_only), [])
        with self.assertRaises(NotFoundError):
            get_transaction(self.db, self.read_only, 1)


class TestUpdate(LedgerTestCase):
    def test_partial_update_changes_only_given_fields(self) -> None:
        tx_id = self.create()
        update_transaction(self.db, self.user, tx_id, {"amount": Decimal("10.00")})
        tx = get_transaction(self.db, self.user, tx_id)
        self.assertEqual(tx.amount, Decimal("10.00"))
        self.assertEqual(tx.type, "expense")
        self.assertEqual(tx.description, "weekly shop")
        self.assertEqual(tx.date, date(2024, 3, 1))

    def test_update_all_fields(self) -> None:
        tx_id = self.create()
        update_transaction(
            self.db,
            self.user,
            tx_id,
            {
                "category_id": self.salary,
                "type": "income",
                "amount": "1500.00",
                "description": "March pay",
                "date": "2024-03-28",
            },
        )
        tx = get_transaction(self.db, self.user, tx_id)
        self.assertEqual(tx.category, "Salary")
        self.assertEqual(tx.type, "income")
        self.assertEqual(tx.amount, Decimal("1500.00"))
        self.assertEqual(tx.description, "March pay")
        self.assertEqual(tx.date, date(2024, 3, 28))

    def test_empty_or_zero_values_keep_previous(self) -> None:
        tx_id = self.create()
        update_transaction(
            self.db,
            self.user,
            tx_id,
            {"amount": 0, "description": "", "type": None, "category_id": 0},
        )
        tx = get_transaction(self.db, self.user, tx_id)
        self.assertEqual(tx.amount, Decimal("42.50"))
        self.assertEqual(tx.description, "weekly shop")
        self.assertEqual(tx.type, "expense")
        self.assertEqual(tx.category_id, self.groceries)

    def test_negative_amount_rejected_without_partial_apply(self) -> None:
        tx_id = self.create()
        with self.assertRaises(ValidationError):
            update_transaction(
                self.db, self.user, tx_id, {"description": "changed", "amount": "-3"}
            )
        self.db.rollback()
        self.assertEqual(get_transaction(self.db, self.user, tx_id).description, "weekly shop")

    def test_unknown_category_rejected(self) -> None:
        tx_id = self.create()
        with self.assertRaises(InvalidReferenceError):
            update_transaction(self.db, self.user, tx_id, {"category_id": 4242})

    def test_same_values_is_idempotent(self) -> None:
        tx_id = self.create()
        changes = {"amount": Decimal("42.50"), "type": "expense"}
        self.assertEqual(
            update_transaction(self.db, self.user, tx_id, changes), "Transaction updated."
        )
        self.assertEqual(
            update_transaction(self.db, self.user, tx_id, changes), "Transaction updated."
        )

    def test_other_users_transaction_not_found(self) -> None:
        tx_id = self.create(actor=self.other)
        with self.assertRaises(NotFoundError):
            update_transaction(self.db, self.user, tx_id, {"amount": 1})
        with self.assertRaises(NotFoundError):
            update_transaction(self.db, self.admin, tx_id, {"amount": 1})
        self.assertEqual(self.db.get(Transaction, tx_id).amount, Decimal("42.50"))

    def test_read_only_forbidden_even_for_missing_id(self) -> None:
        with self.assertRaises(ForbiddenError):
            update_transaction(self.db, self.read_only, 999, {"amount": 1})


class TestDelete(LedgerTestCase):
    def test_delete_removes_row(self) -> None:
        tx_id = self.create()
        self.assertEqual(delete_transaction(self.db, self.user, tx_id), "Transaction deleted.")
        with self.assertRaises(NotFoundError):
            get_transaction(self.db, self.user, tx_id)

    def test_delete_twice_not_found(self) -> None:
        tx_id = self.create()
        delete_transaction(self.db, self.user, tx_id)
        with self.assertRaises(NotFoundError):
            delete_transaction(self.db, self.user, tx_id)

    def test_other_users_transaction_not_found_and_kept(self) -> None:
        tx_id = self.create(actor=self.other)
        with self.assertRaises(NotFoundError):
            delete_transaction(self.db, self.user, tx_id)
        self.assertIsNotNone(self.db.get(Transaction, tx_id))

    def test_read_only_forbidden(self) -> None:
        with self.assertRaises(ForbiddenError):
            delete_transaction(self.db, self.read_only, 1)


if __name__ == "__main__":
    unittest.main()
