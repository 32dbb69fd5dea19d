"""
Warden — Basic Usage Example

Demonstrates issuing, verifying, rotating and tampering with membership
tokens.
"""

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from warden import Cipher, IntegrityError, InvalidTokenError, MaxAgePolicy, MembershipTokenService, Secret


def main():
    # Your passphrase — the only key to your tokens
    passphrase = Secret("my-secret-passphrase-change-this")

    # ── Example 1: Issue and verify ──
    print("=" * 50)
    print("  Example 1: Issue and verify")
    print("=" * 50)

    service = MembershipTokenService(Cipher(passphrase))

    token = service.issue("member-1024")
    print(f"Token ({len(token)} chars): {token[:48]}...")

    result = service.verify(token)
    print(f"Verified: {result.to_dict()}")

    # ── Example 2: Caller-side expiry ──
    print()
    print("=" * 50)
    print("  Example 2: Expiry policy")
    print("=" * 50)

    strict = MembershipTokenService(Cipher(passphrase), max_age=MaxAgePolicy(24))
    print(f"Within 24h: {strict.verify(token).is_valid}")

    # ── Example 3: Secret rotation ──
    print()
    print("=" * 50)
    print("  Example 3: Secret rotation")
    print("=" * 50)

    rotated = MembershipTokenService(
        Cipher(Secret("next-passphrase"), previous_secrets=[passphrase])
    )
    print(f"Old token after rotation: {rotated.verify(token).is_valid}")

    # ── Example 4: Tampering ──
    print()
    print("=" * 50)
    print("  Example 4: Tampering")
    print("=" * 50)

    tampered = token[:-5] + ("A" if token[-5] != "A" else "B") + token[-4:]
    try:
        service.verify(tampered)
    except (InvalidTokenError, IntegrityError) as e:
        print(f"Rejected: {e}")


if __name__ == "__main__":
    main()
