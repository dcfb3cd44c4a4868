"""Defines login/logout options and attribute sources."""

from typing import Any, Optional, NamedTuple, Mapping, Dict, Union, Type, \
    TypeVar
from enum import Enum

from .constants import UMN_IDP_LOGOUT_URL
from .exceptions import InvalidArgument


def merge_options(base: Optional[Mapping], override: Optional[Mapping]) -> dict:
    """
    Merge two option mappings, key by key.

    Neither input is modified. Keys in ``override`` always win.

    Parameters
    ----------
    base : dict or None
    override : dict or None

    Returns
    -------
    dict

    """
    merged: Dict[str, Any] = {}
    # All of the base options first...
    for key, value in (base or {}).items():
        merged[key] = value
    # ...then clobber with anything passed in.
    for key, value in (override or {}).items():
        merged[key] = value
    return merged


class AttributeSource(Enum):
    """Where the SSO agent puts session attributes."""

    FROM_HEADERS = 'from_headers'
    FROM_ENVIRONMENT = 'from_environment'


class LoginOptions(NamedTuple):
    """
    Parameters for the SP ``/Login`` handler.

    A field left as ``None`` is absent, and is not sent to the handler.
    """

    target: Optional[str] = None
    """URL to return to after login. Defaults to the current request URL."""

    force_authn: Optional[bool] = None
    """Require the user to re-authenticate at the IdP."""

    entity_id: Optional[str] = None
    """Entity ID of the IdP to authenticate against."""

    authn_context_class_ref: Optional[str] = None
    """Requested authentication context class."""

    passive: Optional[bool] = None
    """Ask the IdP not to interact with the user (``isPassive``)."""

    mkey: Optional[bool] = None
    """Request MKey multi-factor authentication."""

    duo: Optional[bool] = None
    """Request Duo multi-factor authentication. Wins over ``mkey``."""

    def present(self) -> dict:
        """Fields that have been set, by name."""
        return {k: v for k, v in self._asdict().items() if v is not None}

    def merge(self, override: Optional['LoginOptions']) -> 'LoginOptions':
        """Overlay the set fields of ``override`` on these options."""
        if override is None:
            return self
        return LoginOptions(**merge_options(self.present(),
                                            override.present()))


class LogoutOptions(NamedTuple):
    """
    Parameters for the SP ``/Logout`` handler.

    A field left as ``None`` is absent. See :data:`DEFAULT_LOGOUT_OPTIONS`
    for the values an authenticator starts from.
    """

    logout_from_idp: Optional[bool] = None
    """Also end the single-sign-on session at the IdP."""

    idp_logout_url: Optional[str] = None
    """IdP logout page used when ``logout_from_idp`` is set."""

    return_url: Optional[str] = None
    """Where to send the user once logout is complete."""

    def present(self) -> dict:
        """Fields that have been set, by name."""
        return {k: v for k, v in self._asdict().items() if v is not None}

    def merge(self, override: Optional['LogoutOptions']) -> 'LogoutOptions':
        """Overlay the set fields of ``override`` on these options."""
        if override is None:
            return self
        return LogoutOptions(**merge_options(self.present(),
                                             override.present()))


DEFAULT_LOGIN_OPTIONS = LoginOptions()
DEFAULT_LOGOUT_OPTIONS = LogoutOptions(logout_from_idp=True,
                                       idp_logout_url=UMN_IDP_LOGOUT_URL)

_ALIASES = {
    'forceAuthn': 'force_authn',
    'entityID': 'entity_id',
    'authnContextClassRef': 'authn_context_class_ref',
    'isPassive': 'passive',
    'logoutFromIdP': 'logout_from_idp',
    'IdPLogoutURL': 'idp_logout_url',
    'return': 'return_url',
}

Options = TypeVar('Options', LoginOptions, LogoutOptions)


def to_options(cls: Type[Options],
               data: Union[None, Options, Mapping]) -> Optional[Options]:
    """
    Coerce ``data`` to an options instance.

    Mappings may use either field names or the parameter names used by the
    Shibboleth handler (e.g. ``forceAuthn``, ``return``).

    Raises
    ------
    :class:`.InvalidArgument`
        Raised if ``data`` is not a mapping, or contains a key that is not a
        known option.

    """
    if data is None or isinstance(data, cls):
        return data
    if not isinstance(data, Mapping):
        raise InvalidArgument(f'Expected {cls.__name__} or a mapping')
    fields = {_ALIASES.get(key, key): value for key, value in data.items()}
    unknown = set(fields) - set(cls._fields)
    if unknown:
        raise InvalidArgument(f'Unknown {cls.__name__}: '
                              f'{", ".join(sorted(unknown))}')
    return cls(**fields)
