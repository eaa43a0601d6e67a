"""
Alias Merge Requests

A user may have been sent to Braze as an email alias while anonymous.
Once the user is known, the alias profile is bound to the external id
profile through the users/identify endpoint.

Braze semantics worth knowing:
- merging a nonexistent alias is accepted as a success and ingests nothing
- merging into a nonexistent external id creates that user and binds the alias
"""

from ...core.entities import UserAlias


def build_user_alias(email: str) -> dict:
    """user_alias object keyed by email."""
    return UserAlias(alias_name=email).to_dict()


def build_merge_request(external_id: str, last_seen_email: str) -> dict:
    """Build the users/identify body merging the email alias into external_id."""
    return {
        "aliases_to_identify": [
            {
                "external_id": external_id,
                "user_alias": build_user_alias(last_seen_email)
            }
        ]
    }
