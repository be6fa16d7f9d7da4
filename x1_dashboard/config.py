"""
Configuration module for the X1 dashboard backend.
Contains environment variables and other configuration settings.
"""
import os
from dotenv import load_dotenv
from typing import List

# Load environment variables
load_dotenv()

# RPC Configuration
RPC_ENDPOINT = os.getenv('RPC_ENDPOINT', 'https://rpc.testnet.x1.xyz/')
RPC_TIMEOUT = float(os.getenv('RPC_TIMEOUT', '10.0'))  # seconds
RPC_COMMITMENT = os.getenv('RPC_COMMITMENT', 'confirmed')

# Logging Configuration
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()
LOG_DIR = os.getenv('LOG_DIR', 'logs')
LOG_THROTTLE_SECONDS = float(os.getenv('LOG_THROTTLE_SECONDS', '30'))

# CORS Configuration
CORS_ORIGINS: List[str] = [
    origin.strip()
    for origin in os.getenv('CORS_ORIGINS', 'http://localhost:3000,http://127.0.0.1:3000').split(',')
    if origin.strip()
]

class Constants:
    """
    Constants used throughout the application.
    """
    # 1 XNT = 1,000,000,000 lamports
    LAMPORTS_PER_XNT = 1_000_000_000

    # Validator rewards: 50,000 credits = 1 XNT, 10% paid out at genesis
    CREDITS_PER_XNT = 50_000
    GENESIS_AIRDROP_SHARE = 0.10

    # Approximate slot duration
    SLOT_DURATION_MS = 400

    # Fees
    BASE_FEE_LAMPORTS = 5_000  # per signature
    PRIORITY_FEE_MULTIPLIER = 1.5

# Application settings
class Config:
    """
    Configuration class for application settings.
    """
    DEBUG = os.getenv('DEBUG', 'False').lower() == 'true'

    # API Settings
    API_VERSION = "0.1.0"
    API_TITLE = "X1 Dashboard API"
    API_DESCRIPTION = "Live network metrics for the X1 dashboard"

    # Server Settings
    HOST = os.getenv('HOST', '0.0.0.0')
    PORT = int(os.getenv('PORT', '8000'))

    RPC_ENDPOINT = RPC_ENDPOINT
