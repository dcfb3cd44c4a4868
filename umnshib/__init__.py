"""
Shibboleth session helpers for University of Minnesota web applications.

The Shibboleth service provider handles the SAML exchange and passes the
attributes of the authenticated session to the application in request headers
or environment variables. This package reads those attributes and builds the
URLs that send users through the SP's login and logout handlers. It keeps no
state of its own.

Quick start
-----------

1. Install this package into your virtual environment.
2. Install :class:`umnshib.extension.ShibAuth` onto your application. This
   makes a :class:`.BasicAuthenticator` for the current request available as
   ``flask.request.shib``.
3. Protect routes with :func:`umnshib.decorators.shib_required`.

.. code-block:: python

   # yourapp/factory.py
   from flask import Flask
   from umnshib.extension import ShibAuth


   def create_web_app() -> Flask:
       app = Flask('foo')
       app.config['SHIB_LOGOUT_OPTIONS'] = {'return': 'https://foo.umn.edu/'}
       ShibAuth(app)
       return app

Outside of Flask, construct a :class:`.BasicAuthenticator` directly from a
:class:`werkzeug.wrappers.Request`.
"""

from .authenticator import BasicAuthenticator
from .domain import LoginOptions, LogoutOptions, AttributeSource, \
    merge_options
from .exceptions import ConfigurationError, InvalidArgument
