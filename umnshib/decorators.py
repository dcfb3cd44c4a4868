"""
Protect Flask routes with a Shibboleth session.

.. code-block:: python

   from flask import request
   from umnshib.decorators import shib_required


   @blueprint.route('/grades', methods=['GET'])
   @shib_required({'mkey': True}, attributes=['displayName'], max_age=3600)
   def grades():
       '''Only for users who logged in with MKey in the last hour.'''
       uid = request.shib_attributes['uid']
       ...

When the decorated route function is called...

- If the :class:`.ShibAuth` extension is not installed, a
  :class:`.ConfigurationError` is raised.
- If there is no session, or the session is older than ``max_age``, the
  request ends with a redirect to the SP login handler.
- Otherwise the attributes are added to the Flask request object as
  ``request.shib_attributes`` and the route is called with the original
  parameters.

"""

from typing import Optional, Callable, Any, Sequence
from functools import wraps
import logging

from flask import request

from .authenticator import LoginOptionsLike
from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)


def shib_required(options: LoginOptionsLike = None,
                  attributes: Optional[Sequence[str]] = None,
                  max_age: Optional[int] = None) -> Callable:
    """
    Generate a decorator that requires a current Shibboleth session.

    Parameters
    ----------
    options : :class:`.LoginOptions` or dict
        Login options used if the user must be sent to log in.
    attributes : list
        Attributes to fetch in addition to the defaults.
    max_age : int
        Maximum session age in seconds. Defaults to the authenticator's.

    Returns
    -------
    function

    """
    def protector(func: Callable) -> Callable:
        """Decorator that provides session enforcement."""
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            auth = getattr(request, 'shib', None)
            if auth is None:
                raise ConfigurationError('ShibAuth extension is not installed')
            request.shib_attributes = auth.get_attributes_or_request_login(
                options, attributes, max_age
            )
            logger.debug('Session is current, proceeding')
            return func(*args, **kwargs)
        return wrapper
    return protector
