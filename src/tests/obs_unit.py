# src/tests/obs_unit.py
import math
import numpy as np
from src.env.observations import build_observation, OBS_SIZE, OBS_LOW, OBS_HIGH
from src.game.sim import PotholeSim, Action
from src.game.level import Gap, Coin
from src.game.config import WIDTH, HEIGHT, GAP_MAX_W


def make_sim() -> PotholeSim:
    sim = PotholeSim(seed=11)
    sim.dispatch(Action.start_run("obs"))
    return sim


def test_shape_dtype_and_range():
    sim = make_sim()
    for _ in range(100):
        obs = build_observation(sim)
        assert isinstance(obs, np.ndarray) and obs.dtype == np.float32 and obs.shape == (OBS_SIZE,)
        assert np.all(obs >= OBS_LOW) and np.all(obs <= OBS_HIGH), f"out of range: {obs}"
        sim.step()


def test_resting_ball_features():
    sim = make_sim()
    obs = build_observation(sim)
    assert math.isclose(obs[0], sim.ball.y / HEIGHT, rel_tol=1e-6)
    assert obs[1] == 0.0, "resting ball has no vertical speed"
    assert obs[2] == 1.0, "resting ball is grounded"
    assert obs[3] == 0.0, "speed starts at base"


def test_gap_lookahead_and_sentinels():
    sim = make_sim()
    sim.level.coins = []
    sim.level.gaps = []
    obs = build_observation(sim)
    assert obs[4] == 1.0 and obs[5] == 0.0, "missing gap sentinel"
    assert obs[6] == 1.0 and obs[7] == 0.0
    assert obs[8] == 1.0 and obs[9] == 0.0, "missing coin sentinel"

    sim.level.gaps = [Gap(x=sim.ball.x + 80, w=GAP_MAX_W / 2, depth=60),
                      Gap(x=sim.ball.x + 400, w=GAP_MAX_W, depth=60)]
    obs = build_observation(sim)
    assert math.isclose(obs[4], 80 / WIDTH, rel_tol=1e-6)
    assert math.isclose(obs[5], 0.5, rel_tol=1e-6)
    assert math.isclose(obs[6], 400 / WIDTH, rel_tol=1e-6)
    assert obs[7] == 1.0


def test_passed_gap_is_not_reported():
    sim = make_sim()
    sim.level.gaps = [Gap(x=sim.ball.x - 200, w=50, depth=60),
                      Gap(x=sim.ball.x + 160, w=45, depth=60)]
    obs = build_observation(sim)
    assert math.isclose(obs[4], 160 / WIDTH, rel_tol=1e-6)
    assert obs[6] == 1.0, "only one gap ahead"


def test_coin_above_ball_is_positive_dy():
    sim = make_sim()
    sim.level.coins = [Coin(x=sim.ball.x + 100, y=sim.ball.y - 90, bob_phase=0.0)]
    obs = build_observation(sim)
    assert math.isclose(obs[8], 100 / WIDTH, rel_tol=1e-6)
    assert math.isclose(obs[9], 90 / HEIGHT, rel_tol=1e-6)


def main():
    tests = [v for k, v in sorted(globals().items()) if k.startswith("test_")]
    for t in tests:
        t()
        print(f"✓ {t.__name__}")
    print("✓ observation unit sanity passed")


if __name__ == "__main__":
    main()
