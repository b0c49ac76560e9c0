#!/usr/bin/env python
"""
Simulate a continuous-playback session with the adaptive selector.

Usage:
    # 25 tracks from the sample catalog
    python scripts/radio.py

    # Reproducible run over a custom catalog
    CATALOG_PATH=data/my_catalog.csv STEPS=50 RNG_SEED=7 python scripts/radio.py
"""

from __future__ import annotations
import os
import random
import sys
from dotenv import load_dotenv
from loguru import logger

from songgraph.config import load_config
from songgraph.engine import RecommendationEngine
from songgraph.errors import NoTrackAvailable, SongGraphError


def main():
    load_dotenv()

    catalog_path = os.getenv("CATALOG_PATH", "data/catalog_sample.csv")
    steps = int(os.getenv("STEPS", "25"))
    rng_seed = os.getenv("RNG_SEED")

    engine = RecommendationEngine(config=load_config())
    try:
        engine.import_file(catalog_path)
    except SongGraphError as e:
        logger.error(f"Error loading catalog: {e}")
        sys.exit(1)

    rng = random.Random(int(rng_seed)) if rng_seed else None
    session = engine.new_session(rng=rng)

    logger.info("=" * 60)
    logger.info(f"📻 Radio: {len(engine.catalog)} songs, {steps} steps")
    logger.info("=" * 60)

    for step in range(1, steps + 1):
        try:
            song = session.advance()
        except NoTrackAvailable as e:
            logger.warning(f"Stopping playback: {e}")
            break
        logger.info(f"  {step:>3}. {song.title} by {song.artist} [{song.formatted_duration()}]")

    logger.info("=" * 60)


if __name__ == "__main__":
    main()
