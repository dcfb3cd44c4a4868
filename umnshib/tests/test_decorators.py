"""Tests for :mod:`umnshib.decorators`."""

from unittest import TestCase, mock

from flask import Flask
from werkzeug.exceptions import HTTPException
from werkzeug.test import create_environ
from werkzeug.wrappers import Request

from .. import decorators
from ..authenticator import BasicAuthenticator
from ..constants import UMN_IDP_ENTITY_ID
from ..exceptions import ConfigurationError


def make_authenticator(headers=None) -> BasicAuthenticator:
    return BasicAuthenticator(Request(create_environ(
        path='/foo', base_url='http://example.com', headers=headers or {}
    )))


class TestShibRequired(TestCase):
    """Tests for :func:`.decorators.shib_required`."""

    def setUp(self):
        """Bind the Flask request proxy so ``mock.patch`` can inspect it."""
        ctx = Flask(__name__).test_request_context()
        ctx.push()
        self.addCleanup(ctx.pop)

    @mock.patch(f'{decorators.__name__}.request',
                new_callable=mock.MagicMock)
    def test_no_extension(self, mock_request):
        """The extension has not attached an authenticator."""
        mock_request.shib = None

        @decorators.shib_required()
        def protected():
            """A protected function."""

        with self.assertRaises(ConfigurationError):
            protected()

    @mock.patch(f'{decorators.__name__}.request',
                new_callable=mock.MagicMock)
    def test_no_session(self, mock_request):
        """There is no Shibboleth session."""
        mock_request.shib = make_authenticator()

        @decorators.shib_required({'duo': True})
        def protected():
            """A protected function."""
            raise AssertionError('Should not be called')

        with self.assertRaises(HTTPException) as ctx:
            protected()
        self.assertEqual(ctx.exception.response.status_code, 302)

    @mock.patch(f'{decorators.__name__}.request',
                new_callable=mock.MagicMock)
    def test_session(self, mock_request):
        """There is a session; attributes are attached to the request."""
        mock_request.shib = make_authenticator({
            'Shib-Identity-Provider': UMN_IDP_ENTITY_ID,
            'uid': 'goldy',
            'displayName': 'Goldy Gopher'
        })

        @decorators.shib_required(attributes=['displayName'])
        def protected(arg, kwarg=None):
            """A protected function."""
            return arg, kwarg

        self.assertEqual(protected('foo', kwarg='bar'), ('foo', 'bar'))
        self.assertEqual(mock_request.shib_attributes['uid'], 'goldy')
        self.assertEqual(mock_request.shib_attributes['displayName'],
                         'Goldy Gopher')
