"""Fixed values for the University of Minnesota Shibboleth deployment."""

SP_HANDLER_URL = '/Shibboleth.sso'
"""Path of the Shibboleth service provider handler on every host."""

UMN_IDP_ENTITY_ID = 'https://idp2.shib.umn.edu/idp/shibboleth'
UMN_TEST_IDP_ENTITY_ID = 'https://idp-test.shib.umn.edu/idp/shibboleth'
UMN_SPOOF_IDP_ENTITY_ID = 'https://idp-spoof-test.shib.umn.edu/idp/shibboleth'

UMN_IDP_ENTITY_IDS = (
    UMN_IDP_ENTITY_ID,
    UMN_TEST_IDP_ENTITY_ID,
    UMN_SPOOF_IDP_ENTITY_ID
)
"""Identity providers whose assertions count as a valid session."""

UMN_IDP_LOGOUT_URL = 'https://idp2.shib.umn.edu/idp/LogoutUMN'
UMN_TEST_IDP_LOGOUT_URL = 'https://idp-test.shib.umn.edu/idp/LogoutUMN'
UMN_SPOOF_IDP_LOGOUT_URL = 'https://idp-spoof-test.shib.umn.edu/idp/LogoutUMN'

UMN_MKEY_AUTHN_CONTEXT = \
    'https://www.umn.edu/shibboleth/classes/authncontext/mkey'
UMN_DUO_AUTHN_CONTEXT = \
    'https://www.umn.edu/shibboleth/classes/authncontext/duo'

UMN_SESSION_MAX_AGE = 10800
"""Default maximum session age, in seconds (3 hours)."""

DEFAULT_ATTRIBUTE_NAMES = ('uid', 'eppn', 'isGuest', 'umnDID')
DEFAULT_DELIMITER = ';'

IDP_ATTRIBUTE = 'Shib-Identity-Provider'
AUTHN_INSTANT_ATTRIBUTE = 'Shib-Authentication-Instant'
AUTHN_METHOD_ATTRIBUTE = 'Shib-Authentication-Method'
