"""Configuration constants for defender-deploy-cli."""

# Environment variables holding the API credentials
API_KEY_ENV = "DEFENDER_KEY"
API_SECRET_ENV = "DEFENDER_SECRET"

# Optional overrides
API_URL_ENV = "DEFENDER_API_URL"
LOG_LEVEL_ENV = "DEFENDER_CLI_LOG_LEVEL"

DEFAULT_API_URL = "https://defender-api.openzeppelin.com"
REQUEST_TIMEOUT = 60  # seconds

CLI_NAME = "npx @openzeppelin/defender-deploy-client-cli"

# Networks supported by OpenZeppelin Defender, keyed by Defender network name
# Chain IDs follow ethereum-lists/chains
DEFENDER_NETWORKS = {
    "mainnet": 1,
    "sepolia": 11155111,
    "holesky": 17000,
    "xdai": 100,
    "sokol": 77,
    "bsc": 56,
    "bsctest": 97,
    "fantom": 250,
    "fantomtest": 4002,
    "avalanche": 43114,
    "fuji": 43113,
    "moonbeam": 1284,
    "moonriver": 1285,
    "moonbase": 1287,
    "matic": 137,
    "mumbai": 80001,
    "amoy": 80002,
    "matic-zkevm": 1101,
    "matic-zkevm-testnet": 1442,
    "arbitrum": 42161,
    "arbitrum-nova": 42170,
    "arbitrum-sepolia": 421614,
    "optimism": 10,
    "optimism-sepolia": 11155420,
    "celo": 42220,
    "alfajores": 44787,
    "harmony-s0": 1666600000,
    "harmony-test-s0": 1666700000,
    "aurora": 1313161554,
    "auroratest": 1313161555,
    "hedera": 295,
    "hederatest": 296,
    "zksync": 324,
    "zksync-sepolia": 300,
    "base": 8453,
    "base-sepolia": 84532,
    "linea": 59144,
    "linea-sepolia": 59141,
    "mantle": 5000,
    "mantle-sepolia": 5003,
    "scroll": 534352,
    "scroll-sepolia": 534351,
    "blast": 81457,
    "blast-sepolia": 168587773,
    "meld": 333000333,
    "meld-kanazawa": 222000222,
}
