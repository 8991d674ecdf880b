import asyncio
import sys
import os

# Add project root to sys.path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sqlalchemy import select
from social_api.core.config import settings
from social_api.db.session import standalone_session
from social_api.models.user import User

async def promote_user(identifier: str):
    """
    Give a user admin rights (isAdmin).
    identifier can be email or username.
    """
    async with standalone_session(settings) as session:
        if "@" in identifier:
            stmt = select(User).where(User.email == identifier)
        else:
            stmt = select(User).where(User.username == identifier)

        result = await session.execute(stmt)
        user = result.scalar_one_or_none()

        if not user:
            print(f"Error: User '{identifier}' not found.")
            return

        user.is_admin = True
        await session.commit()
        print(f"Success: User '{user.username}' ({user.email}) is now an admin.")

if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("Usage: python scripts/make_admin.py <email_or_username>")
        sys.exit(1)

    target = sys.argv[1]
    asyncio.run(promote_user(target))
