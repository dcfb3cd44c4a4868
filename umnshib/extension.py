"""Attaches a :class:`.BasicAuthenticator` to each Flask request."""

from typing import Optional
import logging

from flask import Flask, request

from . import config, app_logging
from .authenticator import BasicAuthenticator
from .domain import AttributeSource
from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class ShibAuth(object):
    """
    Makes Shibboleth session information available on the request.

    Intended for use in a Flask application factory, for example:

    .. code-block:: python

       from flask import Flask
       from umnshib.extension import ShibAuth
       from someapp import routes


       def create_web_app() -> Flask:
          app = Flask('someapp')
          app.config.from_pyfile('config.py')
          ShibAuth(app)
          app.register_blueprint(routes.blueprint)
          return app

    Views can then use ``flask.request.shib``, or be protected with
    :func:`umnshib.decorators.shib_required`.
    """

    def __init__(self, app: Optional[Flask] = None) -> None:
        """
        Initialize ``app``, if provided.

        Parameters
        ----------
        app : :class:`Flask`

        """
        if app is not None:
            self.init_app(app)

    def init_app(self, app: Flask) -> None:
        """
        Set configuration defaults and attach :meth:`.load_authenticator`.

        Parameters
        ----------
        app : :class:`Flask`

        """
        self.app = app
        for key in ('SHIB_HANDLER_URL', 'SHIB_ATTRIBUTE_SOURCE',
                    'SHIB_SESSION_MAX_AGE', 'SHIB_LOGIN_OPTIONS',
                    'SHIB_LOGOUT_OPTIONS', 'SHIB_JSON_LOGGING'):
            self.app.config.setdefault(key, getattr(config, key))
        source = self.app.config['SHIB_ATTRIBUTE_SOURCE']
        try:
            AttributeSource(str(source).lower())
        except ValueError as e:
            raise ConfigurationError(
                f'Invalid SHIB_ATTRIBUTE_SOURCE: {source}'
            ) from e
        if self.app.config['SHIB_JSON_LOGGING']:
            app_logging.setup_logger()
        self.app.before_request(self.load_authenticator)

    def load_authenticator(self) -> None:
        """Build an authenticator for the current request."""
        auth = BasicAuthenticator(
            request._get_current_object(),
            login_options=self.app.config['SHIB_LOGIN_OPTIONS'],
            logout_options=self.app.config['SHIB_LOGOUT_OPTIONS'],
            environ=request.environ,
            session_max_age=int(self.app.config['SHIB_SESSION_MAX_AGE'])
        )
        auth.set_handler_url(self.app.config['SHIB_HANDLER_URL'])
        auth.set_attribute_access_method(
            self.app.config['SHIB_ATTRIBUTE_SOURCE']
        )
        logger.debug('Shibboleth session from %s: %s',
                     auth.get_idp_entity_id(), auth.has_session())
        request.shib = auth
