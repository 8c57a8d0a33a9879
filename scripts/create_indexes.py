import asyncio

from carefund.core.db import ensure_indexes, get_client, get_db


async def main():
    await ensure_indexes(get_db())
    get_client().close()

if __name__ == "__main__":
    asyncio.run(main())
