import argparse
import asyncio
import getpass
import sys

from loguru import logger

from pizza_pension.api.v1.services.auth import AuthService
from pizza_pension.core.db.session import AsyncSessionLocal, engine, init_models
from pizza_pension.core.errors import UserAlreadyExists


async def create_admin(username: str, password: str) -> int:
    await init_models()
    async with AsyncSessionLocal() as db:
        try:
            user = await AuthService(db).provision_user(username, password)
        except UserAlreadyExists as e:
            logger.error(str(e))
            return 1
    logger.info(f"Admin user created successfully (id={user.id})")
    return 0


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Create the admin account for the registration dashboard.")
    parser.add_argument("username")
    parser.add_argument("--password", help="read from the terminal when omitted")
    args = parser.parse_args(argv)

    password = args.password or getpass.getpass("Password: ")
    if not password:
        parser.error("password must not be empty")

    async def _run() -> int:
        try:
            return await create_admin(args.username, password)
        finally:
            await engine.dispose()

    return asyncio.run(_run())


if __name__ == "__main__":
    sys.exit(main())
