#!/usr/bin/env python3
"""
Curling Bot Demonstration

Plays a single turn against a match snapshot (a JSON file, or a built-in
sample position) and prints the board assessment and the resulting throw.
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from curlbot.config import BotSettings, Config, config
from curlbot.core import CurlingBot, MatchSnapshot, Stone, Team
from curlbot.core.constants import FAR_HOG_LINE, FAR_TEE_LINE, weight_label


def sample_snapshot():
    """Fifth stone of the 8th end, red lying two, yellow with hammer."""
    return MatchSnapshot(
        stones=[
            Stone(x=0.2, y=FAR_TEE_LINE - 0.1, team=Team.RED),
            Stone(x=-0.5, y=FAR_TEE_LINE + 0.4, team=Team.RED),
            Stone(x=0.9, y=FAR_TEE_LINE + 1.2, team=Team.YELLOW),
            Stone(x=0.1, y=FAR_HOG_LINE + 2.5, team=Team.YELLOW),
        ],
        red_thrown=4,
        yellow_thrown=4,
        hammer=Team.YELLOW,
        red_score=3,
        yellow_score=2,
        current_end=8,
        total_ends=10,
    )


def print_decision(decision):
    board = decision.board
    plan = decision.plan
    throw = decision.throw

    print("\nBoard")
    print("=====")
    print(f"Stone number: {board.bot_stone_num}  Hammer: {board.has_hammer}")
    print(f"Shot team: {board.shot_team.value if board.shot_team else '-'}")
    print(f"Scoring: bot {board.bot_scoring}, opponent {board.opp_scoring}")
    print(f"Score differential: {board.score_diff:+d}")

    print("\nPlan")
    print("====")
    print(f"{plan.description} -> target ({plan.target_x:.2f}, {plan.target_y:.2f})")
    print(f"Weight {plan.weight:.1f} ({weight_label(plan.weight)})")
    print(f"Ideal aim {decision.ideal_aim:.2f}°")

    print("\nThrow")
    print("=====")
    print(json.dumps(throw.to_dict(), indent=2))
    print(f"Perfect attempt: {throw.perfect}")


def save_settings(args):
    """Persist command-line overrides under the ``bot`` config section."""
    saves = []
    if args.difficulty:
        saves.append(config.set("bot.difficulty", args.difficulty))
    if args.seed is not None:
        saves.append(config.set("bot.seed", args.seed))
    for thread in saves:
        thread.join()
    print(f"Saved settings to {config.config_file}")


def main():
    parser = argparse.ArgumentParser(description="Play one curling bot turn")
    parser.add_argument("snapshot", nargs="?", help="Snapshot JSON file")
    parser.add_argument("--difficulty", choices=["easy", "medium", "hard"])
    parser.add_argument("--seed", type=int, help="Random seed")
    parser.add_argument("--config", help="Configuration file")
    parser.add_argument(
        "--save",
        action="store_true",
        help="Store --difficulty and --seed in the configuration file",
    )
    parser.add_argument("--verbose", "-v", action="store_true")
    args = parser.parse_args()

    if args.config:
        Config.set_config_file(args.config)

    level = "DEBUG" if args.verbose else config.get("logging.level", "info").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    settings = BotSettings.from_config(config)
    if args.seed is not None:
        settings = settings.model_copy(update={"seed": args.seed})

    bot = CurlingBot(settings)
    if args.difficulty:
        bot.set_difficulty(args.difficulty)

    if args.save:
        save_settings(args)

    if args.snapshot:
        with open(Path(args.snapshot), encoding="utf-8") as f:
            snapshot = MatchSnapshot.from_dict(json.load(f))
    else:
        snapshot = sample_snapshot()

    print_decision(bot.take_turn(snapshot))
    return 0


if __name__ == "__main__":
    sys.exit(main())
