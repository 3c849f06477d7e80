"""
Entry point for the Key-Value Backend
"""

import sys
import os
import logging
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Add src directory to Python path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), 'src'))

from app import app
from config.settings import HOST, PORT

logger = logging.getLogger(__name__)

if __name__ == "__main__":
    import uvicorn
    logger.info(f"Starting Key-Value Backend on port {PORT}")
    # lifespan="on" makes a failed database bootstrap exit the process non-zero
    uvicorn.run(app, host=HOST, port=PORT, lifespan="on")
