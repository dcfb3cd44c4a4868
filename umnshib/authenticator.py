"""
Derives Shibboleth session state from a single request.

The Shibboleth SP (``mod_shib``/``shibd``) sits in front of the application
and injects the attributes of the authenticated session into the request,
either as headers (when the application runs behind a reverse proxy) or as
environment variables. :class:`BasicAuthenticator` reads those attributes and
builds the URLs needed to send the user through the SP's login and logout
handlers.

.. code-block:: python

   from flask import request
   from umnshib import BasicAuthenticator

   @blueprint.route('/profile')
   def profile():
       auth = BasicAuthenticator(request)
       if not auth.has_session():
           return auth.redirect_to_login()
       return render_template('profile.html', **auth.get_attributes())

Header names are looked up in the request's header map as-is after
normalization (``HTTP_SHIB_IDENTITY_PROVIDER`` becomes
``shib-identity-provider``). Werkzeug headers are case-insensitive; any other
header map must already be lowercased.
"""

import os
from typing import Optional, Union, Mapping, Sequence, List, Dict, Any
from datetime import datetime
from urllib.parse import urlencode, quote
import logging

from werkzeug.exceptions import abort
from werkzeug.utils import redirect
from werkzeug.wrappers import Response

from . import util
from .constants import SP_HANDLER_URL, UMN_IDP_ENTITY_IDS, \
    UMN_MKEY_AUTHN_CONTEXT, UMN_DUO_AUTHN_CONTEXT, UMN_SESSION_MAX_AGE, \
    DEFAULT_ATTRIBUTE_NAMES, DEFAULT_DELIMITER, IDP_ATTRIBUTE, \
    AUTHN_INSTANT_ATTRIBUTE, AUTHN_METHOD_ATTRIBUTE
from .domain import LoginOptions, LogoutOptions, AttributeSource, \
    DEFAULT_LOGIN_OPTIONS, DEFAULT_LOGOUT_OPTIONS, to_options
from .exceptions import ConfigurationError, InvalidArgument

logger = logging.getLogger(__name__)

LoginOptionsLike = Union[None, LoginOptions, Mapping]
LogoutOptionsLike = Union[None, LogoutOptions, Mapping]


def _param(value: Any) -> str:
    """Render a query parameter value the way the SP expects it."""
    if isinstance(value, bool):
        return 'true' if value else 'false'
    return str(value)


def _encode(params: Mapping[str, Any]) -> str:
    return urlencode({k: _param(v) for k, v in params.items()},
                     safe='', quote_via=quote)


class BasicAuthenticator(object):
    """
    Shibboleth session helper for one request/response cycle.

    Do not share an instance between requests.
    """

    def __init__(self, request: Any,
                 login_options: LoginOptionsLike = None,
                 logout_options: LogoutOptionsLike = None,
                 response: Optional[Response] = None,
                 environ: Optional[Mapping[str, str]] = None,
                 session_max_age: int = UMN_SESSION_MAX_AGE) -> None:
        """
        Wrap ``request``.

        Parameters
        ----------
        request : :class:`werkzeug.wrappers.Request`
            Anything with ``host``, ``path`` and ``headers`` will do.
        login_options : :class:`.LoginOptions` or dict
            Defaults for :meth:`build_login_url`.
        logout_options : :class:`.LogoutOptions` or dict
            Defaults for :meth:`build_logout_url`, layered over
            :data:`.DEFAULT_LOGOUT_OPTIONS`.
        response : :class:`werkzeug.wrappers.Response`
            If provided, redirects are written to this response.
        environ : dict
            Variables used when attributes come from the environment.
            Defaults to :data:`os.environ`.
        session_max_age : int
            Seconds a login remains valid; see :meth:`has_session_timed_out`.

        """
        self._request = request
        self._response = response
        self._environ = os.environ if environ is None else environ
        self.login_options = DEFAULT_LOGIN_OPTIONS.merge(
            to_options(LoginOptions, login_options)
        )
        self.logout_options = DEFAULT_LOGOUT_OPTIONS.merge(
            to_options(LogoutOptions, logout_options)
        )
        self.session_max_age = session_max_age
        self._handler_url = SP_HANDLER_URL
        self._attribute_source = AttributeSource.FROM_HEADERS

    def get_handler_url(self) -> str:
        """Path of the SP handler."""
        return self._handler_url

    def set_handler_url(self, handler_url: str) -> None:
        """Use a handler other than ``/Shibboleth.sso``."""
        self._handler_url = handler_url

    def _hostname(self) -> str:
        """Request host without the port."""
        host: str = self._request.host
        if host.startswith('['):
            return host[:host.index(']') + 1]
        return host.split(':', 1)[0]

    def _current_url(self) -> str:
        url = f'https://{self._hostname()}{self._request.path}'
        query_string = getattr(self._request, 'query_string', b'')
        if isinstance(query_string, bytes):
            query_string = query_string.decode('latin-1')
        if query_string:
            url += f'?{query_string}'
        return url

    def build_login_url(self, options: LoginOptionsLike = None) -> str:
        """
        Build a URL for the SP login handler.

        Unless a ``target`` is given, the user returns to the current request
        URL on this host, query string included, over https. The port is
        dropped, since the SP handler is served on the default https port.

        Parameters
        ----------
        options : :class:`.LoginOptions` or dict
            Overrides the instance's login options, field by field.

        Returns
        -------
        str

        """
        opts = self.login_options.merge(to_options(LoginOptions, options))
        params: Dict[str, Any] = {
            'target': opts.target if opts.target else self._current_url()
        }
        if opts.force_authn is not None:
            params['forceAuthn'] = opts.force_authn
        if opts.entity_id is not None:
            params['entityID'] = opts.entity_id
        if opts.authn_context_class_ref is not None:
            params['authnContextClassRef'] = opts.authn_context_class_ref
        if opts.passive is not None:
            params['isPassive'] = opts.passive
        # Duo is checked last, so it wins if both are requested.
        if opts.mkey:
            params['authnContextClassRef'] = UMN_MKEY_AUTHN_CONTEXT
        if opts.duo:
            params['authnContextClassRef'] = UMN_DUO_AUTHN_CONTEXT

        base = f'https://{self._hostname()}{self._handler_url}/Login?'
        return base + _encode(params)

    def build_logout_url(self, options: LogoutOptionsLike = None) -> str:
        """
        Build a URL for the SP logout handler.

        When logging out of the IdP as well, the return URL is nested inside
        the IdP logout URL. It is encoded once there, and again along with
        the rest of the ``return`` parameter, so that the IdP receives it
        intact.
        """
        opts = self.logout_options.merge(to_options(LogoutOptions, options))
        params: Dict[str, str] = {}
        if opts.logout_from_idp:
            params['return'] = opts.idp_logout_url
            if opts.return_url is not None:
                params['return'] += '?return=' + quote(opts.return_url,
                                                       safe='')
        elif opts.return_url is not None:
            params['return'] = opts.return_url

        base = f'https://{self._hostname()}{self._handler_url}/Logout?'
        return base + _encode(params)

    def _redirect(self, location: str) -> Response:
        if self._response is None:
            return redirect(location, code=302)
        self._response.status_code = 302
        self._response.headers['Location'] = location
        return self._response

    def redirect_to_login(self, options: LoginOptionsLike = None) -> Response:
        """
        Send the user to the SP login handler.

        Returns
        -------
        :class:`werkzeug.wrappers.Response`
            A 302 response; return it from the view to end the request.

        """
        url = self.build_login_url(options)
        logger.debug('Redirecting to login: %s', url)
        return self._redirect(url)

    def redirect_to_logout(self, options: LogoutOptionsLike = None) -> Response:
        """Send the user to the SP logout handler. See :meth:`redirect_to_login`."""
        url = self.build_logout_url(options)
        logger.debug('Redirecting to logout: %s', url)
        return self._redirect(url)

    def has_session(self) -> bool:
        """Whether a UMN identity provider asserted this session."""
        return self.get_idp_entity_id() in UMN_IDP_ENTITY_IDS

    def has_session_timed_out(self, max_age: Optional[int] = None) -> bool:
        """
        Check whether the login is older than ``max_age`` seconds.

        No session counts as timed out. A session without an authentication
        instant never times out.
        """
        if not self.has_session():
            return True
        logged_in_at = self.logged_in_since()
        if logged_in_at is None:
            return False
        if max_age is None:
            max_age = self.session_max_age
        return util.epoch(logged_in_at) + max_age <= util.now()

    def _logged_in_with(self, authn_context: str) -> bool:
        return self.has_session() \
            and self.get_attribute_value(AUTHN_METHOD_ATTRIBUTE) == authn_context

    def logged_in_with_mkey(self) -> bool:
        """Whether the user authenticated with MKey."""
        return self._logged_in_with(UMN_MKEY_AUTHN_CONTEXT)

    def logged_in_with_duo(self) -> bool:
        """Whether the user authenticated with Duo."""
        return self._logged_in_with(UMN_DUO_AUTHN_CONTEXT)

    def logged_in_since(self) -> Optional[datetime]:
        """
        Get the time at which the user authenticated.

        Returns
        -------
        :class:`.datetime` or None
            ``None`` if the instant is missing or is not valid ISO-8601.

        """
        value = self.get_attribute_value(AUTHN_INSTANT_ATTRIBUTE)
        instant = util.parse_instant(value)
        if value and instant is None:
            logger.debug('Could not parse authentication instant: %s', value)
        return instant

    def get_idp_entity_id(self) -> Optional[str]:
        """Entity ID of the IdP that authenticated the user."""
        return self.get_attribute_value(IDP_ATTRIBUTE)

    def get_attribute_access_method(self) -> str:
        """Either ``from_headers`` or ``from_environment``."""
        return self._attribute_source.value

    def set_attribute_access_method(self, method: str) -> None:
        """
        Choose where attributes are read from.

        Raises
        ------
        :class:`.ConfigurationError`
            If ``method`` is not ``from_headers`` or ``from_environment``.

        """
        try:
            self._attribute_source = AttributeSource(str(method).lower())
        except ValueError as e:
            raise ConfigurationError(
                f'Invalid attribute access method: {method}'
            ) from e

    def normalize_attribute_name(self, name: str) -> str:
        """Map an attribute name to its key in the active source."""
        if self._attribute_source is AttributeSource.FROM_ENVIRONMENT:
            return name
        name = name.replace('_', '-').lower()
        if name.startswith('http-'):
            name = name[len('http-'):]
        return name

    def get_attribute_value(self, name: str) -> Optional[str]:
        """Get a single attribute, or ``None``."""
        key = self.normalize_attribute_name(name)
        if self._attribute_source is AttributeSource.FROM_ENVIRONMENT:
            return self._environ.get(key)
        return self._request.headers.get(key)

    def get_attribute_values(self, name: str,
                             delimiter: str = DEFAULT_DELIMITER) \
            -> Optional[List[str]]:
        """Split a multi-valued attribute."""
        value = self.get_attribute_value(name)
        if value is None:
            return None
        return value.split(delimiter)

    def get_default_attribute_names(self) -> List[str]:
        """Attributes that :meth:`get_attributes` always includes."""
        return list(DEFAULT_ATTRIBUTE_NAMES)

    def get_attribute_names(self, requested: Optional[Sequence[str]] = None) \
            -> List[str]:
        """
        Default attribute names followed by any additional ``requested`` ones.

        Raises
        ------
        :class:`.InvalidArgument`
            If ``requested`` is not a list or tuple of names.

        """
        if requested is None:
            requested = []
        if isinstance(requested, (str, bytes)) \
                or not isinstance(requested, Sequence):
            raise InvalidArgument('Requested attributes must be a sequence')
        names = self.get_default_attribute_names()
        for name in requested:
            if name not in names:
                names.append(name)
        return names

    def get_attributes(self, requested: Optional[Sequence[str]] = None) \
            -> Dict[str, Optional[str]]:
        """Get attribute values, by name."""
        return {name: self.get_attribute_value(name)
                for name in self.get_attribute_names(requested)}

    def get_attributes_or_request_login(
            self, options: LoginOptionsLike = None,
            requested: Optional[Sequence[str]] = None,
            max_age: Optional[int] = None) -> Dict[str, Optional[str]]:
        """
        Get attributes for a current session, or send the user to log in.

        If there is no session, or the session has timed out, the request is
        aborted with a redirect to the login handler. Timed-out sessions are
        sent with ``forceAuthn``.

        Raises
        ------
        :class:`werkzeug.exceptions.HTTPException`
            Carries the 302 response to the login handler.

        """
        if not self.has_session():
            logger.debug('No session; requesting login')
            abort(self.redirect_to_login(options))
        if self.has_session_timed_out(max_age):
            logger.debug('Session timed out; requesting login')
            opts = to_options(LoginOptions, options) or LoginOptions()
            abort(self.redirect_to_login(opts._replace(force_authn=True)))
        return self.get_attributes(requested)
