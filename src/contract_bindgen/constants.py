"""Configuration constants for contract-bindgen."""

import re

# Etherscan API
DEFAULT_ETHERSCAN_API_URL = "https://api.etherscan.io/api"
ETHERSCAN_REQUEST_TIMEOUT = 30  # seconds

# Etherscan signals its rate limit with a 200 response carrying this pair
RATE_LIMIT_MESSAGE = "NOTOK"
RATE_LIMIT_RESULT = "Max rate limit reached"
OK_MESSAGE = "OK"

DEFAULT_API_MAX_RETRIES = 3
DEFAULT_API_RETRY_DELAY = 2  # seconds

# Compiler version embedded in artifact file names, e.g. "Foo.0.8.15.json"
COMPILER_VERSION_RE = re.compile(r"\.\d+\.\d+\.\d+")

# First id handed out when canonicalizing storage layout AST ids
CANONICAL_AST_ID_START = 1000

TEMP_ARTIFACTS_DIR_PREFIX = "contract-bindgen-"
ABI_FILE_SUFFIX = ".abi"
BYTECODE_FILE_SUFFIX = ".bin"

METADATA_FILE_SUFFIX = "_more"
DEFAULT_METADATA_EXTENSION = ".py"

ETHERSCAN_METADATA_TEMPLATE = "etherscan_metadata.py.j2"
LOCAL_METADATA_TEMPLATE = "local_metadata.py.j2"

DEFAULT_ABIGEN = "abigen"
