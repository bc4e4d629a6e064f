"""Reset all dispatch state in Redis (useful for testing)."""

import asyncio

from dispatch.state.manager import StateManager


async def reset_all_state() -> None:
    """Delete every key under the dispatch namespace."""
    print("\n⚠️  WARNING: This will delete ALL dispatch data from Redis!")
    response = input("Are you sure? (yes/no): ")

    if response.lower() != "yes":
        print("Cancelled.")
        return

    print("\nResetting state...")

    state_manager = StateManager()
    await state_manager.connect()

    deleted = 0
    if state_manager.redis_client:
        async for key in state_manager.redis_client.scan_iter(match=state_manager.key("*")):
            await state_manager.redis_client.delete(key)
            deleted += 1

    await state_manager.disconnect()

    print(f"✓ Cleared {deleted} key(s) from Redis\n")


if __name__ == "__main__":
    asyncio.run(reset_all_state())
