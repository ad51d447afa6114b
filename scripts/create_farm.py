#!/usr/bin/env python3
"""
Create a farm and its admin user from the command line.

The admin gets a random password and a password reset email (logged by the
default email provider), so they choose their own password on first use.

Usage:
  python scripts/create_farm.py --email admin@example.com --farm-name "North Pasture"
"""

import argparse
import asyncio
import secrets
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.application.errors import AppError
from src.application.use_cases.auth import request_password_reset, sign_up
from src.config.settings import get_settings
from src.infrastructure.auth.jwt_service import JWTService
from src.infrastructure.auth.password import PasswordHasher
from src.infrastructure.db.session import (
    SQLAlchemyUnitOfWork,
    create_engine,
    create_session_factory,
)
from src.infrastructure.email.providers.logging_provider import LoggingEmailService
from src.infrastructure.email.renderer.engine import EmailTemplateRenderer


async def create_farm(email: str, farm_name: str, location: str, size: float, units: str) -> None:
    settings = get_settings()
    engine = create_engine(settings.database_url)
    session_factory = create_session_factory(engine)
    jwt_service = JWTService(
        secret_key=settings.jwt_secret_key.get_secret_value(),
        algorithm=settings.jwt_algorithm,
        access_token_expires_minutes=settings.jwt_access_token_expires_minutes,
        refresh_token_expires_days=settings.jwt_refresh_token_expires_days,
        reset_token_expires_minutes=settings.jwt_reset_token_expires_minutes,
        issuer=settings.jwt_issuer,
        audience=settings.jwt_audience,
    )
    email_service = LoggingEmailService()

    try:
        async with SQLAlchemyUnitOfWork(session_factory) as uow:
            result = await sign_up.execute(
                uow=uow,
                payload=sign_up.SignUpInput(
                    email=email,
                    password=secrets.token_urlsafe(32),
                    farm_name=farm_name,
                    farm_location=location,
                    farm_size=size,
                    farm_units=units,
                ),
                password_hasher=PasswordHasher(),
                jwt_service=jwt_service,
            )
        print("\nFarm created")
        print(f"   Farm ID: {result.profile.farm_ids[0]}")
        print(f"   User ID: {result.profile.user_id}")
        print(f"   Email: {result.profile.email}")

        async with SQLAlchemyUnitOfWork(session_factory) as uow:
            await request_password_reset.execute(
                uow=uow,
                email=email,
                jwt_service=jwt_service,
                email_service=email_service,
                renderer=EmailTemplateRenderer.create_default(),
                settings=settings,
            )
        for message in email_service.sent:
            print(f"\nPassword reset email for {', '.join(message.to)}:")
            print(message.text or message.html)
    except AppError as exc:
        print(f"\nError creating farm: {exc.message}")
        sys.exit(1)
    finally:
        await engine.dispose()


def main() -> None:
    parser = argparse.ArgumentParser(description="Create a farm with an admin user")
    parser.add_argument("--email", required=True, help="Email of the farm admin")
    parser.add_argument("--farm-name", required=True, help="Display name of the farm")
    parser.add_argument("--location", default="", help="Farm location")
    parser.add_argument("--size", type=float, default=0.0, help="Farm size")
    parser.add_argument("--units", default="hectares", choices=["hectares", "acres"])
    args = parser.parse_args()

    asyncio.run(create_farm(args.email, args.farm_name, args.location, args.size, args.units))


if __name__ == "__main__":
    main()
