# src/tests/sim_tests.py
"""
Run-level checks for PotholeSim: phase transitions, scoring, collisions, replay.

Usage (from repo root):
  python -m src.tests.sim_tests
  pytest src/tests/sim_tests.py
"""

from __future__ import annotations
import math
import sys

from src.game.sim import PotholeSim, Phase, Action, ActionKind
from src.game.level import Gap, Coin
from src.game.events import EventKind
from src.game.config import (
    BASE_SPEED, SPEED_INCREMENT, PASSIVE_SCORE_RATE, COIN_BONUS, GAP_BONUS,
    JUMP_FORCE, GRAVITY, BALL_RADIUS, DEFAULT_NICKNAME, WIDTH, SEED_CURSOR_MIN,
    BASE_SPACING,
)


def playing_sim(seed: int = 7) -> PotholeSim:
    sim = PotholeSim(seed=seed)
    sim.dispatch(Action.start_run("tester"))
    assert sim.phase is Phase.PLAYING
    return sim


def gap_under_ball_next_tick(sim: PotholeSim) -> Gap:
    # after this tick's scroll the ball's centre sits 20px inside the gap
    return Gap(x=sim.ball.x - 20 + sim.speed, w=60, depth=60)


def test_start_screen_ignores_play_actions():
    sim = PotholeSim(seed=1)
    assert sim.phase is Phase.START
    for a in (Action.jump(), Action.toggle_pause(), Action.replay()):
        assert sim.dispatch(a) == []
        assert sim.phase is Phase.START
    assert sim.ball.vy == 0.0
    assert sim.step() == [] and sim.ticks == 0


def test_start_run_nickname():
    sim = PotholeSim(seed=1)
    sim.dispatch(Action.start_run("   "))
    assert sim.phase is Phase.PLAYING and sim.nickname == DEFAULT_NICKNAME

    sim.dispatch(Action.start_run("someone else"))
    assert sim.nickname == DEFAULT_NICKNAME, "start while playing must be a no-op"

    sim = PotholeSim(seed=1)
    sim.dispatch(Action.start_run("  Ada "))
    assert sim.nickname == "Ada"


def test_pause_freezes_and_resumes():
    sim = playing_sim()
    sim.step()
    sim.dispatch(Action.toggle_pause())
    assert sim.phase is Phase.PAUSED
    frozen = (sim.score, sim.speed, sim.ticks, [g.x for g in sim.gaps])
    for _ in range(10):
        assert sim.step() == []
    assert (sim.score, sim.speed, sim.ticks, [g.x for g in sim.gaps]) == frozen
    assert sim.dispatch(Action.jump()) == [] and sim.ball.grounded

    sim.dispatch(Action.toggle_pause())
    assert sim.phase is Phase.PLAYING
    sim.step()
    assert sim.ticks == frozen[2] + 1


def test_speed_ramps_and_passive_score():
    sim = playing_sim()
    expected_score = 0.0
    speed = sim.speed
    for _ in range(150):
        expected_score += sim.speed * PASSIVE_SCORE_RATE
        sim.step()
        assert sim.phase is Phase.PLAYING
        assert sim.speed >= speed
        speed = sim.speed
    assert math.isclose(sim.speed, BASE_SPEED + 150 * SPEED_INCREMENT)
    assert math.isclose(sim.score, expected_score)
    assert sim.display_score == math.floor(sim.score)


def test_jump_is_gated_on_grounded():
    sim = playing_sim()
    events = sim.dispatch(Action.jump())
    assert [e.kind for e in events] == [EventKind.JUMP]
    assert sim.ball.vy == -JUMP_FORCE and not sim.ball.grounded

    sim.step()
    vy = sim.ball.vy
    assert sim.dispatch(Action.jump()) == []
    assert sim.ball.vy == vy


def test_queued_actions_drain_before_tick():
    sim = PotholeSim(seed=3)
    sim.post(Action.start_run("q"))
    sim.post(Action.jump())
    events = sim.step()
    assert sim.phase is Phase.PLAYING and sim.ticks == 1
    assert EventKind.JUMP in [e.kind for e in events]
    assert math.isclose(sim.ball.vy, -JUMP_FORCE + GRAVITY)


def test_landing_event_once_per_landing():
    sim = playing_sim()
    sim.dispatch(Action.jump())
    landings = 0
    for _ in range(60):
        landings += sum(1 for e in sim.step() if e.kind is EventKind.LAND)
    assert landings == 1 and sim.ball.grounded


def test_fatal_collision_ends_run_once():
    sim = playing_sim()
    sim.level.coins = []
    sim.level.gaps = [gap_under_ball_next_tick(sim)]
    sim.score = 41.7

    events = sim.step()
    assert sim.phase is Phase.GAME_OVER
    overs = [e for e in events if e.kind is EventKind.GAME_OVER]
    assert len(overs) == 1
    assert sim.final_score == math.floor(41.7 + BASE_SPEED * PASSIVE_SCORE_RATE) == 41
    assert overs[0].points == 41
    assert sim.ball.y == sim.platform_y + BALL_RADIUS and sim.ball.vy == 0.0
    assert sim.display_score == 41

    ticks = sim.ticks
    for _ in range(5):
        assert sim.step() == []
    assert sim.ticks == ticks and sim.phase is Phase.GAME_OVER


def test_airborne_over_gap_is_safe():
    sim = playing_sim()
    sim.level.gaps = [gap_under_ball_next_tick(sim)]
    sim.ball.y = sim.platform_y - 100
    sim.ball.vy = 0.0
    sim.ball.grounded = False
    sim.step()
    assert sim.phase is Phase.PLAYING


def test_clearing_a_gap_scores_once():
    sim = playing_sim()
    sim.level.coins = []
    sim.level.gaps.insert(0, Gap(x=sim.ball.x - 100, w=50, depth=60))
    before = sim.score
    events = sim.step()
    cleared = [e for e in events if e.kind is EventKind.GAP_CLEARED]
    assert len(cleared) == 1 and cleared[0].points == GAP_BONUS
    assert math.isclose(sim.score - before, GAP_BONUS + BASE_SPEED * PASSIVE_SCORE_RATE)

    for _ in range(5):
        assert not [e for e in sim.step() if e.kind is EventKind.GAP_CLEARED]


def test_coin_collected_once():
    sim = playing_sim()
    b = sim.ball
    coin = Coin(x=b.x + sim.speed, y=b.y, bob_phase=0.0, bob_speed=0.0)
    sim.level.coins = [coin]
    before, speed = sim.score, sim.speed

    events = sim.step()
    coins = [e for e in events if e.kind is EventKind.COIN]
    assert len(coins) == 1 and coins[0].points == COIN_BONUS
    assert coin.collected and coin not in sim.coins
    assert math.isclose(sim.score - before, COIN_BONUS + speed * PASSIVE_SCORE_RATE)

    for _ in range(5):
        assert not [e for e in sim.step() if e.kind is EventKind.COIN]


def test_coin_event_at_drawn_position():
    sim = playing_sim()
    b = sim.ball
    coin = Coin(x=b.x + sim.speed, y=b.y, bob_phase=1.0, bob_speed=0.0)
    sim.level.coins = [coin]

    coins = [e for e in sim.step() if e.kind is EventKind.COIN]
    assert len(coins) == 1
    assert coins[0].x == coin.x
    assert math.isclose(coins[0].y, coin.draw_y)
    assert coins[0].y != coin.y


def test_replay_resets_run():
    sim = playing_sim()
    for _ in range(30):
        sim.step()
    sim.level.gaps = [gap_under_ball_next_tick(sim)]
    sim.step()
    assert sim.phase is Phase.GAME_OVER

    assert sim.dispatch(Action.jump()) == []
    assert sim.dispatch(Action.toggle_pause()) == [] and sim.phase is Phase.GAME_OVER

    sim.dispatch(Action.replay())
    assert sim.phase is Phase.START
    assert sim.score == 0.0 and sim.final_score == 0 and sim.speed == BASE_SPEED
    assert sim.nickname == DEFAULT_NICKNAME
    assert sim.ball.x == WIDTH * 0.25
    assert sim.ball.y == sim.platform_y - BALL_RADIUS
    assert sim.ball.vy == 0.0 and sim.ball.grounded
    assert 3 <= len(sim.gaps) <= 5
    assert sim.gaps[0].x >= WIDTH + SEED_CURSOR_MIN + BASE_SPACING - 1e-6
    assert all(not g.scored for g in sim.gaps)

    sim.dispatch(Action.start_run(""))
    assert sim.phase is Phase.PLAYING and sim.score == 0.0


def test_reset_with_seed_reproduces_layout():
    a = PotholeSim(seed=99)
    layout = [(g.x, g.w) for g in a.gaps]
    a.dispatch(Action.start_run("x"))
    for _ in range(20):
        a.step()
    a.reset(seed=99)
    assert a.phase is Phase.START
    assert [(g.x, g.w) for g in a.gaps] == layout


def test_resize_on_start_screen_reseeds():
    sim = PotholeSim(seed=5)
    sim.dispatch(Action.resize(600, 400))
    assert sim.platform_y == 340
    assert sim.ball.x == 150 and sim.ball.y == 340 - BALL_RADIUS
    assert sim.gaps[-1].x >= 600 * 2.5
    assert sim.phase is Phase.START

    sim.dispatch(Action.resize(0, 400))
    assert sim.width == 600 and sim.height == 400


def test_unknown_action_kind_rejected():
    sim = PotholeSim(seed=1)
    try:
        sim.dispatch(Action(kind="teleport"))  # type: ignore[arg-type]
    except ValueError:
        pass
    else:
        raise AssertionError("unknown action kind accepted")
    assert ActionKind("jump") is ActionKind.JUMP


def main():
    tests = [v for k, v in sorted(globals().items()) if k.startswith("test_")]
    try:
        for t in tests:
            t()
            print(f"✓ {t.__name__}")
    except AssertionError as e:
        print(f"✗ Test failed: {e}", file=sys.stderr)
        sys.exit(1)
    print("🎉 All sim tests passed")


if __name__ == "__main__":
    main()
