import unittest

from couchconnector.filters import keys_from_where
from couchconnector.models import ModelDefinition


class TestKeysFromWhere(unittest.TestCase):

    def setUp(self):
        self.book = ModelDefinition('Book', 'isbn')
        self.default = ModelDefinition('Author')

    def test_equality(self):
        self.assertEqual(keys_from_where(self.default, {'id': 'x'}), ['x'])
        self.assertEqual(keys_from_where(self.book, {'isbn': 'x'}), ['x'])

    def test_bytes(self):
        self.assertEqual(keys_from_where(self.default, {'id': b'x'}), [b'x'])

    def test_inq(self):
        keys = keys_from_where(self.default, {'id': {'inq': ['a', 'b']}})
        self.assertEqual(keys, ['a', 'b'])

    def test_inq_keeps_duplicates_and_order(self):
        keys = keys_from_where(self.default,
                               {'id': {'inq': ('b', 'a', 'b')}})
        self.assertEqual(keys, ['b', 'a', 'b'])

    def test_other_field(self):
        self.assertEqual(keys_from_where(self.default, {'name': 'x'}), [])
        self.assertEqual(keys_from_where(self.book, {'id': 'x'}), [])

    def test_unsupported_operators(self):
        self.assertEqual(keys_from_where(self.default, {'id': {'gt': 'a'}}),
                         [])
        self.assertEqual(keys_from_where(self.default,
                                         {'id': {'inq': 'a'}}), [])
        self.assertEqual(keys_from_where(self.default, {'id': 5}), [])
        self.assertEqual(
            keys_from_where(self.default, {'or': [{'id': 'a'}]}), [])

    def test_no_where(self):
        self.assertEqual(keys_from_where(self.default, None), [])
        self.assertEqual(keys_from_where(self.default, {}), [])
