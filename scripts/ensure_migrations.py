import asyncio
import sys

from album_activity.infra.migrations import apply_migrations
from album_activity.infra.postgres import close_pool, get_pool
from album_activity.obs import init as init_obs


async def main() -> None:
    pool = await get_pool()
    try:
        applied = await apply_migrations(pool)
    finally:
        await close_pool()
    if applied:
        for name in applied:
            print(f"Applied {name}")
    else:
        print("Schema is up to date.")


if __name__ == "__main__":
    if sys.platform == 'win32':
        asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())
    init_obs()
    asyncio.run(main())
