import unittest

from utils.payment_utils import is_active_tenant, group_by_owner, payment_due_anchor


class TestIsActiveTenant(unittest.TestCase):

    def test_active_statuses(self):
        for status in ('active', 'activo'):
            with self.subTest(status=status):
                self.assertTrue(is_active_tenant({'id': 't1', 'contractStatus': status}))

    def test_finished_statuses_are_inactive_without_warning(self):
        for status in ('finished', 'finalizado'):
            with self.subTest(status=status):
                with self.assertNoLogs('utils.payment_utils', level='WARNING'):
                    self.assertFalse(is_active_tenant({'id': 't1', 'contractStatus': status}))

    def test_unknown_status_is_inactive_and_logged(self):
        with self.assertLogs('utils.payment_utils', level='WARNING') as logs:
            self.assertFalse(is_active_tenant({'id': 't1', 'contractStatus': 'suspended'}))
        self.assertIn("t1", logs.output[0])
        self.assertIn("suspended", logs.output[0])


class TestPaymentUtils(unittest.TestCase):

    def test_due_anchor_falls_back_to_payment_date(self):
        self.assertEqual(payment_due_anchor({'date': '2023-11-01', 'dueDate': '2023-12-01'}), '2023-12-01')
        self.assertEqual(payment_due_anchor({'date': '2023-11-01', 'dueDate': ''}), '2023-11-01')

    def test_group_by_owner_skips_records_without_owner(self):
        records = [
            {'id': 'a1', 'userId': 'owner-a'},
            {'id': 'orphan'},
            {'id': 'b1', 'userId': 'owner-b'},
            {'id': 'a2', 'userId': 'owner-a'},
        ]
        grouped = group_by_owner(records)
        self.assertEqual({owner: [r['id'] for r in rs] for owner, rs in grouped.items()},
                         {'owner-a': ['a1', 'a2'], 'owner-b': ['b1']})


if __name__ == '__main__':
    unittest.main()
