"""Resilient client example with attempt budgets and rate limiting.

This example demonstrates:
- Retrying transient failures with an attempt budget
- Rate limiting support (x-ratelimit-reset)
- Comprehensive error handling
"""

import asyncio
import logging

from pylifxcloud import (
    BadAccessTokenError,
    ColorParseError,
    LifxClient,
    LifxConnectionError,
    LifxServerError,
    NotFoundError,
    RateLimitError,
    Selector,
    State,
    parse_results,
)
from pylifxcloud.resilience import RateLimiter


# Configure detailed logging
logging.basicConfig(
    level=logging.DEBUG,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)


async def main() -> None:
    """Main example function with resilience patterns."""
    # Replace with your token
    token = "your_token"

    # Rate Limiter: wait 30s when the API gives no reset time, never more than 2 minutes
    limiter = RateLimiter(default_retry_delay=30.0, max_retry_delay=120.0)

    async with LifxClient(token, rate_limiter=limiter, timeout=10) as client:
        # Local errors are raised before anything is sent
        try:
            client.select("all").set_state().color("rgb:300,0,0")
        except ColorParseError as err:
            print(f"Rejected locally ({err.kind.name}): {err}")

        try:
            # Up to 5 attempts: 5xx and connection errors are retried,
            # 429 waits for the reset time, other 4xx stop at once
            response = await (
                client.set_states()
                .add(Selector.group("Kitchen"), State(power=True, brightness=0.7))
                .add(Selector.label("Porch").random(), State(power=False))
                .default(State(duration=1))
                .retries(5)
                .send()
            )
        except BadAccessTokenError:
            print("Token rejected - check your access token")
        except NotFoundError as err:
            print(f"Nothing matched {err.url}")
        except RateLimitError:
            print("Still rate limited after all attempts")
        except (LifxServerError, LifxConnectionError) as err:
            print(f"Gave up after retries: {err}")
        else:
            print(f"Applied (HTTP {response.status})")

        # Per-device results from a single-selector request
        response = await client.select(Selector.all()).toggle().retry().send()
        for result in parse_results(response.data):
            print(f"{result.label}: {result.raw_status}")


if __name__ == "__main__":
    asyncio.run(main())
