"""Tests for :mod:`cookieauth.policy`."""

import json
from unittest import TestCase

from cookieauth import policy
from cookieauth.exceptions import SessionMiss, MalformedSession, \
    InvalidPrincipal, StoreFailure


def _encode(data) -> bytes:
    return json.dumps(data).encode('utf-8')


class TestParseRecord(TestCase):
    """:func:`policy.parse_record` loads JSON session records."""

    def test_no_session(self):
        for raw in [None, b'']:
            with self.assertRaises(SessionMiss):
                policy.parse_record(raw)

    def test_record(self):
        record = {'cookie': {'maxAge': 3600}, 'user': {'name': 'Alice'}}
        self.assertEqual(policy.parse_record(_encode(record)), record)

    def test_str_record(self):
        """Stores that decode responses hand back text."""
        self.assertEqual(policy.parse_record('{"user": "bob"}'),
                         {'user': 'bob'})

    def test_not_json(self):
        with self.assertRaises(MalformedSession):
            policy.parse_record(b'{"user": ')

    def test_not_utf8(self):
        with self.assertRaises(MalformedSession):
            policy.parse_record(b'\xff\xfe')

    def test_deeply_nested(self):
        """A record too deeply nested to parse is malformed."""
        depth = 100000
        for raw in [b'[' * depth + b']' * depth,
                    b'{"user":' * depth + b'1' + b'}' * depth]:
            with self.assertRaises(MalformedSession):
                policy.parse_record(raw)

    def test_not_an_object(self):
        """A record that parses to something other than a mapping is bad."""
        for raw in [b'null', b'[1, 2]', b'"user"', b'42']:
            with self.assertRaises(MalformedSession):
                policy.parse_record(raw)

    def test_malformed_is_a_store_failure(self):
        """A corrupted record is a server-side problem."""
        self.assertTrue(issubclass(MalformedSession, StoreFailure))


class TestGetPrincipal(TestCase):
    """:func:`policy.get_principal` applies the principal policy."""

    def test_principal(self):
        principal = {'name': 'Alice', 'id': 4}
        self.assertEqual(policy.get_principal({'user': principal}, 'user'),
                         principal)

    def test_custom_field(self):
        self.assertEqual(
            policy.get_principal({'account': {'name': 'Bob'}}, 'account'),
            {'name': 'Bob'}
        )

    def test_missing_principal(self):
        with self.assertRaises(InvalidPrincipal):
            policy.get_principal({'account': {'name': 'Bob'}}, 'user')

    def test_empty_principal(self):
        for principal in [None, False, 0, '', {}, []]:
            with self.assertRaises(InvalidPrincipal):
                policy.get_principal({'user': principal}, 'user')

    def test_anonymous(self):
        with self.assertRaises(InvalidPrincipal) as ctx:
            policy.get_principal({'user': {'name': 'Anonymous'}}, 'user')
        self.assertEqual(ctx.exception.reason, 'cookie')

    def test_anonymous_match_is_exact(self):
        for name in ['anonymous', 'Anonymous ', 'Anonymously']:
            principal = {'name': name}
            self.assertEqual(
                policy.get_principal({'user': principal}, 'user'),
                principal
            )

    def test_principal_without_name(self):
        """Principals need not be mappings."""
        self.assertEqual(policy.get_principal({'user': 'bob'}, 'user'), 'bob')
        self.assertEqual(policy.get_principal({'user': 42}, 'user'), 42)


class TestEvaluate(TestCase):
    def test_evaluate(self):
        record = {'user': {'name': 'Alice'}}
        self.assertEqual(policy.evaluate(_encode(record), 'user'),
                         (record, {'name': 'Alice'}))

    def test_miss(self):
        with self.assertRaises(SessionMiss):
            policy.evaluate(None, 'user')
