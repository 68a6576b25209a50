"""
Quick check that the users API is reachable and answering

Run: python scripts/check_users_api.py [user_id]
"""

import asyncio
import sys
from pathlib import Path
from dotenv import load_dotenv

sys.path.insert(0, str(Path(__file__).parent.parent))

# Load environment variables
load_dotenv()

from userclient.core.config import settings, validate_settings
from userclient.core.exceptions import RequestError
from userclient.core.logging import setup_logging, get_logger, LogContext
from userclient.services.user_service import UserService
from userclient.storage.session_store import InMemorySessionStorage

setup_logging()
logger = get_logger("scripts.check_users_api")


async def check_api(user_id=None):
    """List users, and fetch one user when an id is given"""
    print("=" * 60)
    print("  Users API Check")
    print("=" * 60 + "\n")

    validate_settings()
    logger.info(f"🔌 Users API: {settings.USERS_API_BASE_URL}")

    # Never touch the real session file from a check
    async with UserService(storage=InMemorySessionStorage()) as service:
        try:
            users = await service.get_all_users()
            count = len(users) if isinstance(users, list) else "?"
            logger.info(f"✅ Listed users ({count})")

            if user_id:
                with LogContext(user_id=user_id, operation="get_user_by_id"):
                    user = await service.get_user_by_id(user_id)
                    logger.info(f"✅ Fetched user: {user}")

        except RequestError as e:
            logger.error(f"❌ {e.message}")
            if e.status_code:
                logger.error(f"   HTTP status: {e.status_code}")
            return False

    print("\n✅ Users API is answering")
    return True


if __name__ == "__main__":
    ok = asyncio.run(check_api(sys.argv[1] if len(sys.argv) > 1 else None))
    sys.exit(0 if ok else 1)
