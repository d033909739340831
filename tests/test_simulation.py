from conftest import SequenceRandom

from wordplay.bot import GreedyBot
from wordplay.dictionary import Dictionary
from wordplay.simulation import simulate_bot_game


def test_simulation_never_repeats_words(bot):
    progress = []
    report = simulate_bot_game(bot, "cat", turns=4,
                               progress_callback=lambda done, total: progress.append(done))
    words = ["CAT"] + [m.word for m in report.moves]
    assert len(words) == len(set(words))
    assert progress == list(range(1, report.completed_turns + 1))
    assert report.total_score == sum(m.score for m in report.moves)
    assert report.success == (report.completed_turns == 4)


def test_simulation_stops_at_dead_end():
    bot = GreedyBot(Dictionary.from_words(["ZZZ"]), random_source=SequenceRandom())
    report = simulate_bot_game(bot, "QQQ", turns=3)
    assert not report.success
    assert report.completed_turns == 0
    assert report.average_time_per_turn == 0.0
    assert report.errors == ["Turn 1: no valid move found"]
