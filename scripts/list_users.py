import asyncio
import sys
import os

# Add project root to sys.path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sqlalchemy import select
from social_api.core.config import settings
from social_api.db.session import standalone_session
from social_api.models.user import User

async def list_users():
    async with standalone_session(settings) as session:
        result = await session.execute(select(User).order_by(User.created_at))
        users = result.scalars().all()
        if not users:
            print("No users found in database.")
        else:
            print("Current Users:")
            for user in users:
                print(
                    f"- {user.username} ({user.email}) | Admin: {user.is_admin} "
                    f"| Followers: {len(user.followers or [])} | Following: {len(user.followings or [])}"
                )

if __name__ == "__main__":
    asyncio.run(list_users())
