"""Default Flask configuration for the Shibboleth extension."""

import os

from .constants import SP_HANDLER_URL, UMN_SESSION_MAX_AGE

SHIB_HANDLER_URL = os.environ.get('SHIB_HANDLER_URL', SP_HANDLER_URL)
"""Path of the SP handler on this host."""

SHIB_ATTRIBUTE_SOURCE = os.environ.get('SHIB_ATTRIBUTE_SOURCE', 'from_headers')
"""
``from_headers`` behind a proxy, ``from_environment`` under mod_shib.

In environment mode, attributes are read from the WSGI environ of the request.
"""

SHIB_SESSION_MAX_AGE = int(os.environ.get('SHIB_SESSION_MAX_AGE',
                                          UMN_SESSION_MAX_AGE))
"""Seconds after authentication at which a login is considered stale."""

SHIB_LOGIN_OPTIONS = None
"""Default login options; a dict or :class:`.LoginOptions`."""

SHIB_LOGOUT_OPTIONS = None
"""Default logout options; a dict or :class:`.LogoutOptions`."""

SHIB_JSON_LOGGING = os.environ.get('SHIB_JSON_LOGGING', '0') == '1'
"""Emit JSON logs on the root logger."""
