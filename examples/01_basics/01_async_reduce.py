"""
A basic example showing how to reduce an async stream to a single value.
"""
import asyncio

from streamreduce import Stream, reduce


async def readings():
    """Simulates a sensor that produces a value every few milliseconds."""
    for value in [3, 9, 4, 12, 7]:
        await asyncio.sleep(0.005)
        yield value


async def keep_max(acc: int, item: int) -> int:
    # A merge step may do its own async work
    await asyncio.sleep(0)
    return max(acc, item)


async def main():
    print("--- Reducing a live stream ---")
    peak = await reduce(readings(), keep_max)
    print(f"Peak reading: {peak}")

    print("--- Reducing through the Stream wrapper ---")
    total = await Stream(readings()).reduce(lambda acc, item: acc + item)
    print(f"Total: {total}")

    print("--- Reducing an empty stream ---")
    nothing = await reduce([], keep_max)
    print(f"Result: {nothing}")


if __name__ == "__main__":
    asyncio.run(main())
