"""CLI / terminal mode for WordPlay."""

from __future__ import annotations

import argparse
import asyncio
import logging
import random
import time
from typing import Callable

from wordplay.bot import GreedyBot
from wordplay.challenge import ChallengeEngine, ChallengeState, sharing_text
from wordplay.constants import (
    ACTION_PASS,
    DEFAULT_MAX_TURNS,
    FALLBACK_WORD,
    INITIAL_WORD_LENGTH,
    STATUS_FINISHED,
)
from wordplay.dictionary import Dictionary
from wordplay.gamestate import GameConfig, GameStateManager
from wordplay.scoring import ScoringResult
from wordplay.simulation import simulate_bot_game
from wordplay.strategies import BOT_STRATEGIES, get_bot_strategy

log = logging.getLogger("wordplay")

InputFn = Callable[[str], str]


def format_scoring_line(scoring: ScoringResult) -> str:
    """Compact scoring line, e.g. ``+ | ~ 2 +1`` for add + rearrange + key."""
    icons: list[str] = []
    if scoring.add_letter_points:
        icons.append("+")
    if scoring.remove_letter_points:
        icons.append("-")
    if scoring.rearrange_points:
        icons.append("~")
    if not icons:
        return ""
    base = scoring.add_letter_points + scoring.remove_letter_points + scoring.rearrange_points
    line = f"{' | '.join(icons)} {base}"
    if scoring.key_letter_usage_points:
        line += f" +{scoring.key_letter_usage_points}"
    return line


def show_help() -> None:
    print("HOW TO PLAY:")
    print("  Transform the current word by adding, removing, or rearranging letters")
    print("  +1 point each for add / remove / rearrange, +1 for using a key letter")
    print("  Key letters you use become LOCKED for the next player (cannot remove)")
    print("  At most one added and one removed letter per turn")
    print("  No word can be played twice in the same game")
    print()
    print("Commands:")
    print("  WORD     -- play a word")
    print("  state    -- show detailed game state")
    print("  pass     -- skip your turn")
    print("  help     -- show this message")
    print("  quit     -- leave the game")
    print()


def show_state(manager: GameStateManager) -> None:
    state = manager.get_state()
    print()
    print("=" * 60)
    print(f"  WORDPLAY -- Turn {state.current_turn}/{state.max_turns}")
    print("=" * 60)
    print(f"  Current word: {state.current_word}")
    if state.key_letters:
        print(f"  Key letters (+1 bonus): {', '.join(state.key_letters)}")
    locks = state.locked_key_letters + state.locked_letters
    if locks:
        print(f"  Locked letters (cannot remove): {', '.join(locks)}")
    if len(state.used_words) > 1:
        print(f"  Recent words: {' -> '.join(state.used_words[-5:])}")
    print()
    for p in state.players:
        marker = ">" if p.is_current_player else " "
        print(f"  {marker} {p.name:<10} {p.score:>3} pts")
    print()


def show_details(manager: GameStateManager) -> None:
    state = manager.get_state()
    stats = manager.get_game_stats()
    print(f"  Status: {state.game_status}   Moves: {state.total_moves}   "
          f"Duration: {stats.duration:.0f}s   Avg score: {stats.average_score:.1f}")
    print(f"  Used words: {' -> '.join(state.used_words)}")
    names = {p.id: p.name for p in state.players}
    for turn in state.turn_history[-5:]:
        print(f"  Turn {turn.turn_number}: {names.get(turn.player_id, '?')} "
              f"{turn.previous_word} -> {turn.new_word} (+{turn.score})")


def _print_scoring(scoring: ScoringResult) -> None:
    line = format_scoring_line(scoring)
    if line:
        print(f"  Scoring: {line}")
    if scoring.key_letters_used:
        print(f"  Key letters used: {', '.join(scoring.key_letters_used)}")


def bot_turn(manager: GameStateManager) -> None:
    print("  Bot is thinking...")
    t0 = time.time()
    move = asyncio.run(manager.make_bot_move())
    elapsed = time.time() - t0

    if move is None:
        last = manager.get_state().turn_history[-1:]
        if last and last[0].action == ACTION_PASS:
            print(f"  Bot passed its turn ({elapsed * 1000:.0f}ms)")
        else:
            print("  Bot couldn't find a valid move")
        return

    print(f"  Bot played: {move.word} (+{move.score} points, {elapsed * 1000:.0f}ms)")
    _print_scoring(manager.get_state().turn_history[-1].scoring)


def human_turn(manager: GameStateManager, input_fn: InputFn = input) -> bool:
    """Read and handle one command.  Returns ``False`` when the player quits."""
    player = manager.get_current_player()
    try:
        raw = input_fn(f"  {player.name}> ").strip()
    except (EOFError, KeyboardInterrupt):
        print()
        return False

    cmd = raw.lower()
    if cmd in ("quit", "exit"):
        return False
    if cmd == "help":
        show_help()
        return True
    if cmd == "state":
        show_details(manager)
        return True
    if cmd == "pass":
        if manager.pass_turn():
            print("  You passed your turn.")
        else:
            print("  Unable to pass turn.")
        return True
    if not raw:
        print("  Please enter a word.")
        return True

    attempt = manager.attempt_move(raw)
    if not attempt.can_apply:
        print(f"  Invalid move: {attempt.reason}")
        return True
    if manager.apply_move(attempt):
        print(f"  Valid move! {attempt.new_word} (+{attempt.scoring_result.total_score} points)")
        _print_scoring(attempt.scoring_result)
    else:
        print("  Failed to apply move.")
    return True


def show_game_over(manager: GameStateManager) -> None:
    state = manager.get_state()
    stats = manager.get_game_stats()
    print()
    print("=" * 60)
    print("  GAME OVER!")
    print("=" * 60)
    if state.winner:
        print(f"  Winner: {state.winner.name} ({state.winner.score} points)")
    else:
        print("  It's a tie!")
    print()
    for p in sorted(state.players, key=lambda p: p.score, reverse=True):
        print(f"  {p.name:<10} {p.score:>3} pts")
    print()
    print(f"  Duration: {stats.duration:.0f}s   Total moves: {stats.total_moves}   "
          f"Avg score/move: {stats.average_score:.1f}")
    for ps in stats.player_stats:
        print(f"  {ps.name}: {ps.move_count} moves, {ps.average_score_per_move:.1f} avg/move")
    names = {p.id: p.name for p in state.players}
    print()
    print("Move history:")
    for turn in state.turn_history:
        print(f"  Turn {turn.turn_number}: {names.get(turn.player_id, '?')} "
              f"{turn.previous_word} -> {turn.new_word} (+{turn.score})")


def run_game(manager: GameStateManager, input_fn: InputFn = input) -> None:
    """Play a game in the terminal until it finishes or the player quits."""
    show_help()
    manager.start_game()

    while manager.get_state().game_status != STATUS_FINISHED:
        show_state(manager)
        player = manager.get_current_player()
        if player is None:
            log.error("No current player found")
            return
        if player.is_bot:
            bot_turn(manager)
        elif not human_turn(manager, input_fn):
            print("Thanks for playing!")
            return

    show_game_over(manager)


def run_simulation(bot: GreedyBot, initial_word: str, turns: int) -> None:
    print(f"Simulating {turns} bot turns from {initial_word.upper()}...\n")
    report = simulate_bot_game(bot, initial_word, turns)
    for i, move in enumerate(report.moves, 1):
        print(f" {i:>3}. {move.word:<12} +{move.score}")
    print()
    print(f"Completed {report.completed_turns}/{turns} turns in {report.total_time:.2f}s "
          f"({report.average_time_per_turn * 1000:.1f}ms/turn), {report.total_score} points.")
    for err in report.errors:
        print(f"  {err}")


def run_challenge(
    engine: ChallengeEngine,
    state: ChallengeState,
    input_fn: InputFn = input,
) -> ChallengeState:
    """Play a daily challenge until it is solved, forfeited or abandoned."""
    print(f"DAILY CHALLENGE -- {state.date}")
    print(f"  Turn {state.start_word} into {state.target_word}")
    print("  Commands: WORD, give up, quit")

    while not state.is_over:
        print(f"  Current word: {state.current_word}   Steps: {state.step_count}")
        try:
            raw = input_fn("  challenge> ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            break
        cmd = raw.lower()
        if cmd in ("quit", "exit"):
            break
        if cmd in ("give up", "forfeit"):
            state = engine.forfeit(state)
            break
        if not raw:
            print("  Please enter a word.")
            continue

        submission = engine.submit_word(raw, state)
        if not submission.is_valid:
            print(f"  Invalid move: {submission.reason}")
            continue
        state = submission.new_state
        if submission.is_complete:
            print(f"  Solved in {state.step_count} steps!")

    print()
    print(sharing_text(state))
    return state


# Entry point

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="WordPlay -- transform the word, beat the bot",
    )
    parser.add_argument("--dict", type=str, default=None,
                        help="Path to dictionary / word list file")
    parser.add_argument("--max-turns", type=int, default=DEFAULT_MAX_TURNS,
                        help="Turns before the game ends")
    parser.add_argument("--initial-word", type=str, default=None,
                        help="Seed word (default: random 4-letter word)")
    parser.add_argument("--no-key-letters", action="store_true",
                        help="Disable key letter bonuses")
    parser.add_argument("--no-locked-letters", action="store_true",
                        help="Disable locking of used key letters")
    parser.add_argument("--bot", choices=sorted(BOT_STRATEGIES) + ["greedy"], default="greedy",
                        help="Bot personality")
    parser.add_argument("--two-player", action="store_true",
                        help="Two humans instead of human vs bot")
    parser.add_argument("--simulate", type=int, metavar="N", default=None,
                        help="Run N turns of bot self-play and exit")
    parser.add_argument("--challenge", nargs="?", const="today", default=None, metavar="DATE",
                        help="Play the daily challenge (YYYY-MM-DD, default today)")
    parser.add_argument("--seed", type=int, default=None,
                        help="Random seed for reproducible games")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Enable debug-level logging")
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="[%(levelname)s] %(message)s",
    )
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    print("WORDPLAY -- Human vs Bot Word Challenge")

    rng = random.Random(args.seed)
    dictionary = Dictionary(args.dict, rng=rng)
    strategy = None if args.bot == "greedy" else get_bot_strategy(args.bot)
    bot = GreedyBot(dictionary, random_source=rng.random, strategy=strategy)

    if args.challenge is not None:
        engine = ChallengeEngine(dictionary)
        day = None if args.challenge == "today" else args.challenge
        run_challenge(engine, engine.daily_challenge(day))
        return

    if args.simulate is not None:
        seed = args.initial_word or dictionary.random_word_of_length(INITIAL_WORD_LENGTH) or FALLBACK_WORD
        run_simulation(bot, seed, args.simulate)
        return

    config = GameConfig(
        max_turns=args.max_turns,
        initial_word=args.initial_word,
        allow_bot_player=not args.two_player,
        enable_key_letters=not args.no_key_letters,
        enable_locked_letters=not args.no_locked_letters,
    )
    run_game(GameStateManager(dictionary, config, bot=bot, rng=rng))


if __name__ == "__main__":
    main()
