"""Repair one-directional follow edges (A in B.followers but B missing from A.followings, or the reverse).

Run: python scripts/reconcile_follows.py
"""
import asyncio
import sys
import os

# Add project root to sys.path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from social_api.core.config import settings
from social_api.core.logging import configure_logging
from social_api.db.session import standalone_session
from social_api.services.graph_service import reconcile_follow_edges

async def reconcile():
    async with standalone_session(settings) as session:
        changed = await reconcile_follow_edges(session)
        await session.commit()
        print(f"Reconciled follow lists on {changed} user(s).")

if __name__ == "__main__":
    configure_logging(settings.LOG_LEVEL)
    asyncio.run(reconcile())
