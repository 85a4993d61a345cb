"""
Standalone walker simulation.

Connects a handful of fake participants to a running relay and random-walks
their locations so the web client has something to show.

Run from the server/ directory:
    python simulate.py --url http://localhost:3000 --walkers 5

Or from the project root:
    python server/simulate.py
"""
from __future__ import annotations

import argparse
import asyncio
import random
import sys
from pathlib import Path

# Ensure the relay package is importable when run as a script
sys.path.insert(0, str(Path(__file__).parent))

import socketio

from relay import protocol

NAMES = ["Ada", "Grace", "Linus", "Barbara", "Ken", "Margaret", "Dennis", "Frances"]


async def walk(url: str, name: str, lat: float, lng: float, steps: int, interval: float) -> None:
    sio = socketio.AsyncClient()

    @sio.on(protocol.ACTIVE_USERS)
    async def on_active_users(users):
        print(f"{name}: {len(users)} other participant(s) online")

    @sio.on(protocol.USER_LEFT)
    async def on_user_left(data):
        print(f"{name}: {data['nickname']} left")

    await sio.connect(url)
    await sio.emit(protocol.SET_NICKNAME, name)
    try:
        for _ in range(steps):
            lat += random.uniform(-0.0005, 0.0005)
            lng += random.uniform(-0.0005, 0.0005)
            await sio.emit(protocol.LOCATION_UPDATE, {
                "lat": lat,
                "lng": lng,
                "accuracy": random.randint(3, 30),
            })
            await asyncio.sleep(interval)
        await sio.emit(protocol.STOP_SHARING)
    finally:
        await sio.disconnect()


async def simulate(args: argparse.Namespace) -> None:
    walkers = [
        walk(
            args.url,
            NAMES[i % len(NAMES)] + ("" if i < len(NAMES) else f" {i}"),
            args.lat + random.uniform(-0.01, 0.01),
            args.lng + random.uniform(-0.01, 0.01),
            args.steps,
            args.interval,
        )
        for i in range(args.walkers)
    ]
    await asyncio.gather(*walkers)
    print("Simulation finished.")


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("--url", default="http://localhost:3000")
    parser.add_argument("--walkers", type=int, default=3)
    parser.add_argument("--steps", type=int, default=60)
    parser.add_argument("--interval", type=float, default=1.0)
    parser.add_argument("--lat", type=float, default=51.5074)
    parser.add_argument("--lng", type=float, default=-0.1278)
    asyncio.run(simulate(parser.parse_args()))


if __name__ == "__main__":
    main()
