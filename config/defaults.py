"""
Configuration Defaults - Single source of truth for all default values.

FAIL-FAST DESIGN:
The subscription default uses an INTENTIONALLY INVALID placeholder value so
a deployment fails loudly if AZURE_SUBSCRIPTION_ID isn't set.

Organization:
    - AzureDefaults: MUST be overridden - uses invalid placeholders (fail-fast)
    - All other *Defaults: Safe universal defaults that work for any deployment

Usage:
    from config.defaults import CosmosDefaults, ProvisioningDefaults

    # In Pydantic Field definitions:
    database_name: str = Field(default=CosmosDefaults.DATABASE_NAME, ...)
"""


# =============================================================================
# AZURE DEFAULTS (MUST override)
# =============================================================================

class AzureDefaults:
    """
    Defaults that MUST be overridden for a real deployment.

    Required Environment Variables:
        AZURE_SUBSCRIPTION_ID - Subscription that owns the resource group
    """

    SUBSCRIPTION_ID = "your-subscription-id"
    LOCATION = "eastus"


# =============================================================================
# STORAGE DEFAULTS (Safe patterns)
# =============================================================================

class StorageDefaults:
    """
    Storage account defaults for static website hosting.

    Account names are built as {ACCOUNT_PREFIX}{suffix} and must stay
    within Azure's 3-24 lowercase alphanumeric limit.
    """

    ACCOUNT_PREFIX = "moviedatabasesa"
    SKU = "Standard_LRS"
    KIND = "StorageV2"
    WEB_CONTAINER = "$web"
    INDEX_DOCUMENT = "index.html"
    ERROR_DOCUMENT = "404.html"


# =============================================================================
# COSMOS DB DEFAULTS (Safe patterns)
# =============================================================================

class CosmosDefaults:
    """Cosmos DB (SQL API) account, database and container defaults."""

    ACCOUNT_PREFIX = "moviedatabase"
    DATABASE_NAME = "moviedb"
    CONTAINER_NAME = "movies"
    PARTITION_KEY_PATH = "/genre"
    FAILOVER_PRIORITY = 0
    ZONE_REDUNDANT = False


# =============================================================================
# PROVISIONING DEFAULTS (Retry / readiness)
# =============================================================================

class ProvisioningDefaults:
    """
    Readiness polling and retry timings.

    Cosmos DB accounts typically take several minutes to provision and
    sub-resource calls can fail for a while after the account reports
    Succeeded, hence the settle delay and the retry policy.
    """

    POLL_INTERVAL_SECONDS = 30
    POLL_MAX_WAIT_SECONDS = 3600
    SETTLE_DELAY_SECONDS = 180

    RETRY_MAX_ATTEMPTS = 5
    RETRY_INITIAL_DELAY_SECONDS = 30
    RETRY_BACKOFF_MULTIPLIER = 2.0
    RETRY_JITTER_RATIO = 0.0

    NAME_SUFFIX_LENGTH = 6


# =============================================================================
# DATASET DEFAULTS
# =============================================================================

class DatasetDefaults:
    """Movie dataset source."""

    URL = (
        "https://raw.githubusercontent.com/LearnDataSci/articles/refs/heads/master/"
        "Python%20Pandas%20Tutorial%20A%20Complete%20Introduction%20for%20Beginners/"
        "IMDB-Movie-Data.csv"
    )
    LOCAL_FILENAME = "IMDB-Movie-Data.csv"
    DOWNLOAD_TIMEOUT_SECONDS = 60


# =============================================================================
# SITE DEFAULTS
# =============================================================================

class SiteDefaults:
    """Static site generation and search client defaults."""

    OUTPUT_DIR = "website"
    SETTINGS_ENTRY = "apiSettings"
    SETTINGS_FILE = ".moviefinder/settings.json"
    SEARCH_API_URL = ""
    SEARCH_API_KEY = ""
    SEARCH_TIMEOUT_SECONDS = 30
    SUBSCRIPTION_KEY_HEADER = "Ocp-Apim-Subscription-Key"


# =============================================================================
# APPLICATION DEFAULTS
# =============================================================================

class AppDefaults:
    """Application-wide settings."""

    ENVIRONMENT = "dev"
    LOG_LEVEL = "INFO"
    DEBUG_MODE = False
