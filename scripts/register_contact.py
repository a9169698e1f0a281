"""Utility script to register the contact details of a notification recipient."""

from __future__ import annotations

import argparse

from sqlalchemy.exc import SQLAlchemyError

from notification_hub.domain.entities import UserContact
from notification_hub.infrastructure.database import SessionLocal, initialize_database
from notification_hub.infrastructure.repositories import PushTokenRepository, UserRepository


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for contact registration."""

    parser = argparse.ArgumentParser(
        description="Register or update a recipient of the notification hub.",
    )
    parser.add_argument("user_id", help="Identifier used when dispatching notifications")
    parser.add_argument("--email", default=None, help="Email address (optional)")
    parser.add_argument("--phone", default=None, help="Phone number in E.164 format (optional)")
    parser.add_argument(
        "--fcm-token",
        default=None,
        help="Push token stored on the user profile (optional)",
    )
    parser.add_argument(
        "--device-token",
        default=None,
        help="Push token stored in the device token table (optional)",
    )
    return parser.parse_args()


def main() -> None:
    """Store the contact described by the command line arguments."""

    args = parse_args()
    initialize_database()

    session = SessionLocal()
    try:
        contact = UserRepository(session).save_contact(
            UserContact(
                id=args.user_id,
                email=args.email,
                phone_number=args.phone,
                fcm_token=args.fcm_token,
            )
        )
        if args.device_token:
            PushTokenRepository(session).save_token(args.user_id, args.device_token)
    except SQLAlchemyError as exc:
        session.rollback()
        raise SystemExit(f"Could not store the contact: {exc}") from exc
    else:
        print(
            "Contact stored:\n"
            f"  ID: {contact.id}\n"
            f"  Email: {contact.email or '-'}\n"
            f"  Phone: {contact.phone_number or '-'}\n"
            f"  Push token: {'yes' if contact.fcm_token or args.device_token else 'no'}"
        )
    finally:
        session.close()


if __name__ == "__main__":
    main()
