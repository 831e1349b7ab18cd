from pathlib import Path

import deployment

#
# Filesystem
#

DEPLOYMENT_DIR = Path(deployment.__file__).parent
CONSTRUCTOR_PARAMS_DIR = DEPLOYMENT_DIR / "constructor_params"
ARTIFACTS_DIR = DEPLOYMENT_DIR / "artifacts"

SCAM_ICO_PARAMS_FILEPATH = CONSTRUCTOR_PARAMS_DIR / "scam_ico.yml"
PUBLISHED_WETH_FILENAME = "canonical-weth.json"

#
# Networks
#

# local chain served by a dev node (ganache, anvil, geth --dev)
DEVELOPMENT = "development"

# in-process chain used by `ape test`
TEST = "test"

# ape provider name of the in-process test chain
TEST_PROVIDER_NAME = "test"

#
# Contracts
#

WETH_CONTRACT = "WETH9"
MOCK_WETH_CONTRACT = "MockWETH"
ICO_CONTRACT = "ScamIco"
SCM_CONTRACT = "Scam"
