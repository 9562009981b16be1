# ABOUTME: Integration tests for the full token lifecycle across storage backends
# ABOUTME: Drives issuance, header authentication, sliding expiry, sign out and purging end to end

from datetime import datetime, timedelta, UTC

import pytest
import time_machine

from tokenauth.components.auth import TokenAuthenticationStrategy, TokenIssuer
from tokenauth.models.auth import AuthFailure, AuthStatus, HeaderAuthRequest

T0 = datetime(2024, 1, 1, 12, 0, tzinfo=UTC)


def credentials(principal, token: str) -> HeaderAuthRequest:
    return HeaderAuthRequest(
        headers={"X-API-KEY": principal.lookup_key, "X-API-TOKEN": token},
        remote_ip="198.51.100.4",
        user_agent="lifecycle-tests",
    )


class TestTokenLifecycle:
    """End-to-end behaviour shared by the document and relational backends."""

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_issue_authenticate_and_sign_out(self, token_repository, principals, settings, alice):
        issuer = TokenIssuer.build(token_repository, settings)
        strategy = TokenAuthenticationStrategy(issuer, principals, settings=settings)

        raw = issuer.create_and_return_token(alice, HeaderAuthRequest(remote_ip="198.51.100.4"))
        signed_in = await strategy.authenticate(credentials(alice, raw))

        assert signed_in.is_success
        assert signed_in.principal.id == alice.id

        issuer.expire_token(alice, credentials(alice, raw))
        signed_out = await strategy.authenticate(credentials(alice, raw))

        assert signed_out.status == AuthStatus.FAILED
        assert signed_out.failure == AuthFailure.INVALID_TOKEN

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_sliding_expiry_extends_on_use(self, token_repository, principals, settings, alice):
        # A touch interval shorter than the expiry window lets each use slide it forward
        issuer = TokenIssuer(token_repository, touch_interval=timedelta(minutes=30))
        strategy = TokenAuthenticationStrategy(issuer, principals, settings=settings)

        with time_machine.travel(T0, tick=False) as traveller:
            raw = issuer.create_and_return_token(alice, expires_in=3600)

            traveller.shift(timedelta(seconds=3599))
            assert (await strategy.authenticate(credentials(alice, raw))).is_success
            assert issuer.find_token(alice, raw).last_used_at == T0 + timedelta(seconds=3599)

            traveller.shift(timedelta(seconds=3600))
            assert (await strategy.authenticate(credentials(alice, raw))).is_success

            traveller.shift(timedelta(seconds=3601))
            assert (await strategy.authenticate(credentials(alice, raw))).status == AuthStatus.FAILED

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_unused_token_expires(self, token_repository, principals, settings, alice):
        issuer = TokenIssuer(token_repository)
        strategy = TokenAuthenticationStrategy(issuer, principals, settings=settings)

        with time_machine.travel(T0, tick=False) as traveller:
            raw = issuer.create_and_return_token(alice, expires_in=3600)

            traveller.shift(timedelta(seconds=3601))
            result = await strategy.authenticate(credentials(alice, raw))

        assert result.failure == AuthFailure.INVALID_TOKEN
        # Expired tokens stay stored until revoked or purged
        assert issuer.find_token(alice, raw) is not None

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_failures_are_indistinguishable(self, token_repository, principals, settings, alice):
        issuer = TokenIssuer(token_repository)
        strategy = TokenAuthenticationStrategy(issuer, principals, settings=settings)

        with time_machine.travel(T0, tick=False) as traveller:
            live = issuer.create_and_return_token(alice)
            expiring = issuer.create_and_return_token(alice, expires_in=1)
            traveller.shift(timedelta(seconds=5))

            results = [
                await strategy.authenticate(
                    HeaderAuthRequest(headers={"X-API-KEY": "ghost@example.com", "X-API-TOKEN": live})
                ),
                await strategy.authenticate(credentials(alice, "not-the-token")),
                await strategy.authenticate(credentials(alice, expiring)),
            ]

        assert {(r.status, r.failure, r.message) for r in results} == {
            (AuthStatus.FAILED, AuthFailure.INVALID_TOKEN, "Invalid credentials")
        }

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_purge_after_sign_ins(self, token_repository, principals, settings, alice, bob):
        issuer = TokenIssuer(token_repository, maximum_tokens_per_user=3)
        strategy = TokenAuthenticationStrategy(issuer, principals, settings=settings)

        with time_machine.travel(T0, tick=False) as traveller:
            tokens = []
            for _ in range(5):
                tokens.append(issuer.create_and_return_token(alice))
                traveller.shift(timedelta(minutes=1))
            bob_token = issuer.create_and_return_token(bob)

            # Using the first token moves it to the front of the ordering
            traveller.shift(timedelta(hours=2))
            assert (await strategy.authenticate(credentials(alice, tokens[0]))).is_success

            assert issuer.purge_old_tokens(alice) == 2

            survivors = [raw for raw in tokens if (await strategy.authenticate(credentials(alice, raw))).is_success]

        assert survivors == [tokens[0], tokens[3], tokens[4]]
        assert (await strategy.authenticate(credentials(bob, bob_token))).is_success
