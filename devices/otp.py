import hashlib
import hmac
import logging
import secrets
import time
from typing import Optional

from django.conf import settings
from django.core.cache import cache

logger = logging.getLogger(__name__)

CODE_LENGTH = 6


def _digest(code: str) -> str:
    return hashlib.sha256(code.encode()).hexdigest()


class PasscodeStore:
    """One-time passcodes keyed by user and device, expiring through the cache

    Wrong guesses are counted under a separate key with the cache's atomic
    ``add``/``incr`` so that concurrent requests each use up an attempt.
    """

    def __init__(self, backend=None, ttl: Optional[int] = None, max_attempts: Optional[int] = None):
        self.backend = backend or cache
        self.ttl = ttl if ttl is not None else settings.OTP_TTL_SECONDS
        self.max_attempts = max_attempts if max_attempts is not None else settings.OTP_MAX_ATTEMPTS

    @staticmethod
    def key_for(user_id, device_id: str) -> str:
        device_key = hashlib.sha256(device_id.encode()).hexdigest()[:32]
        return f"otp:{user_id}:{device_key}"

    @classmethod
    def attempts_key_for(cls, user_id, device_id: str) -> str:
        return f"{cls.key_for(user_id, device_id)}:attempts"

    def issue(self, user, device_id: str) -> str:
        """Create a fresh code for the device, replacing any outstanding one"""
        code = f"{secrets.randbelow(10 ** CODE_LENGTH):0{CODE_LENGTH}d}"
        entry = {
            'digest': _digest(code),
            'expires_at': time.time() + self.ttl,
        }
        self.backend.set(self.key_for(user.pk, device_id), entry, timeout=self.ttl)
        self.backend.set(self.attempts_key_for(user.pk, device_id), 0, timeout=self.ttl)
        logger.info(f"Issued passcode for user {user.pk}")
        return code

    def verify(self, user, device_id: str, code: str) -> bool:
        """Check a submitted code; a match consumes the entry"""
        entry = self.backend.get(self.key_for(user.pk, device_id))
        if entry is None:
            return False

        remaining = entry['expires_at'] - time.time()
        if remaining <= 0:
            self.discard(user, device_id)
            return False

        # the counter never outlives the code it guards
        attempts_key = self.attempts_key_for(user.pk, device_id)
        self.backend.add(attempts_key, 0, timeout=max(1, int(remaining)))
        try:
            attempts = self.backend.incr(attempts_key)
        except ValueError:
            # counter expired between add and incr
            return False

        if attempts > self.max_attempts:
            self.discard(user, device_id)
            return False

        if hmac.compare_digest(entry['digest'], _digest(str(code).strip())):
            self.discard(user, device_id)
            return True

        if attempts >= self.max_attempts:
            self.discard(user, device_id)
            logger.warning(f"Passcode attempts exhausted for user {user.pk}")
        return False

    def discard(self, user, device_id: str) -> None:
        self.backend.delete_many([
            self.key_for(user.pk, device_id),
            self.attempts_key_for(user.pk, device_id),
        ])
