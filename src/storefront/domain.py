"""Domain initialization and configuration.

Single bounded context for the storefront: the catalogue, the user aggregate
with its embedded cart, orders, and Google sign-in.
"""

from protean.domain import Domain

from storefront.utils.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging()

# Get logger for this module
logger = get_logger(__name__)

# Domain Composition Root
storefront = Domain(name="storefront")
