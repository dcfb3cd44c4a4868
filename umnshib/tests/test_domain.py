"""Tests for :mod:`umnshib.domain`."""

from unittest import TestCase
import copy

from hypothesis import given
from hypothesis import strategies as st

from .. import domain
from ..constants import UMN_IDP_LOGOUT_URL
from ..exceptions import InvalidArgument

options = st.dictionaries(st.text(max_size=8),
                          st.one_of(st.none(), st.booleans(), st.text()))


class TestMergeOptions(TestCase):
    """Tests for :func:`.domain.merge_options`."""

    @given(options, options)
    def test_override_wins(self, base, override):
        """Every key is present, and override values win."""
        merged = domain.merge_options(base, override)
        self.assertEqual(set(merged), set(base) | set(override))
        for key, value in override.items():
            self.assertEqual(merged[key], value)
        for key in set(base) - set(override):
            self.assertEqual(merged[key], base[key])

    @given(options, options)
    def test_inputs_not_mutated(self, base, override):
        """Neither input is changed."""
        base_before = copy.deepcopy(base)
        override_before = copy.deepcopy(override)
        domain.merge_options(base, override)
        self.assertEqual(base, base_before)
        self.assertEqual(override, override_before)

    def test_none_is_empty(self):
        """Missing mappings are treated as empty."""
        self.assertEqual(domain.merge_options(None, None), {})
        self.assertEqual(domain.merge_options({'a': 1}, None), {'a': 1})
        self.assertEqual(domain.merge_options(None, {'a': 1}), {'a': 1})


class TestLoginOptions(TestCase):
    """Tests for :class:`.domain.LoginOptions`."""

    def test_merge_keeps_unset_fields(self):
        """Fields that the override leaves unset are kept."""
        base = domain.LoginOptions(entity_id='https://idp', mkey=True)
        merged = base.merge(domain.LoginOptions(mkey=False, passive=True))
        self.assertEqual(merged.entity_id, 'https://idp')
        self.assertFalse(merged.mkey)
        self.assertTrue(merged.passive)
        self.assertTrue(base.mkey, 'Base options are unchanged')

    def test_merge_nothing(self):
        """Merging ``None`` returns the same options."""
        base = domain.LoginOptions(target='https://foo.umn.edu/')
        self.assertIs(base.merge(None), base)


class TestLogoutOptions(TestCase):
    """Tests for :class:`.domain.LogoutOptions`."""

    def test_defaults(self):
        """The authenticator starts out logging out of the IdP."""
        self.assertTrue(domain.DEFAULT_LOGOUT_OPTIONS.logout_from_idp)
        self.assertEqual(domain.DEFAULT_LOGOUT_OPTIONS.idp_logout_url,
                         UMN_IDP_LOGOUT_URL)
        self.assertIsNone(domain.DEFAULT_LOGOUT_OPTIONS.return_url)

    def test_return_only_override(self):
        """Passing only a return URL does not reset the other fields."""
        merged = domain.DEFAULT_LOGOUT_OPTIONS.merge(
            domain.LogoutOptions(return_url='https://foo.umn.edu/')
        )
        self.assertTrue(merged.logout_from_idp)
        self.assertEqual(merged.idp_logout_url, UMN_IDP_LOGOUT_URL)
        self.assertEqual(merged.return_url, 'https://foo.umn.edu/')


class TestToOptions(TestCase):
    """Tests for :func:`.domain.to_options`."""

    def test_handler_parameter_names(self):
        """Mappings may use the names the SP handler uses."""
        opts = domain.to_options(domain.LoginOptions, {
            'forceAuthn': True,
            'entityID': 'https://idp',
            'authnContextClassRef': 'urn:foo',
            'target': 'https://foo.umn.edu/',
            'duo': True
        })
        self.assertEqual(opts, domain.LoginOptions(
            target='https://foo.umn.edu/',
            force_authn=True,
            entity_id='https://idp',
            authn_context_class_ref='urn:foo',
            duo=True
        ))
        logout = domain.to_options(domain.LogoutOptions, {
            'logoutFromIdP': False,
            'return': 'https://foo.umn.edu/'
        })
        self.assertFalse(logout.logout_from_idp)
        self.assertEqual(logout.return_url, 'https://foo.umn.edu/')
        self.assertIsNone(logout.idp_logout_url)

    def test_passthrough(self):
        """Options instances and ``None`` are returned as-is."""
        opts = domain.LoginOptions(mkey=True)
        self.assertIs(domain.to_options(domain.LoginOptions, opts), opts)
        self.assertIsNone(domain.to_options(domain.LoginOptions, None))

    def test_unknown_key(self):
        """An unrecognized option is an error."""
        with self.assertRaises(InvalidArgument):
            domain.to_options(domain.LoginOptions, {'tagret': 'oops'})
        with self.assertRaises(InvalidArgument):
            domain.to_options(domain.LogoutOptions, {'forceAuthn': True})

    def test_not_a_mapping(self):
        """Anything other than a mapping or options instance is an error."""
        with self.assertRaises(InvalidArgument):
            domain.to_options(domain.LoginOptions, ['mkey'])
