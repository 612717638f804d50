"""
Simulated network latency.
"""

import asyncio


async def simulate_latency(seconds: float) -> None:
    """Suspend for the configured delay. Zero delay returns immediately."""
    if seconds > 0:
        await asyncio.sleep(seconds)
