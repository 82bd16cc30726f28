# /experiments/sanity_rollout.py
"""
Sanity rollouts for PotholeEnv: a random jumper and a one-rule jumper over a
fixed seed set. One CSV row per episode; optional per-seed .npz traces.

Usage (from repo root):
  python -m experiments.sanity_rollout
  python -m experiments.sanity_rollout --policies heuristic --seeds 111,222,333 --save-traces
  python -m experiments.sanity_rollout --policies random --steps 300 --out-dir /tmp/sanity
"""

from __future__ import annotations
import argparse
import csv
from pathlib import Path
from typing import Callable, Dict, List

import numpy as np

from src.env.pj_env import PotholeEnv

Policy = Callable[[np.ndarray], int]

# Jump once the next gap's leading edge is this close (fraction of the width).
HEURISTIC_TRIGGER_DX = 0.1
RANDOM_JUMP_PROB = 0.1

FIELDS = [
    "policy", "seed", "frame_skip", "decisions", "return", "score",
    "final_speed", "terminated", "truncated", "airborne_ratio",
]


def random_jumper(seed: int) -> Policy:
    rng = np.random.RandomState(10_000 + seed)
    return lambda _obs: int(rng.random_sample() < RANDOM_JUMP_PROB)


def gap_jumper(_seed: int) -> Policy:
    """
    Jump when grounded and the nearest gap ahead starts within
    HEURISTIC_TRIGGER_DX. A jump covers ~190 px at base speed, more than twice
    the widest gap, so this clears most early gaps and fails as speed climbs.
    """
    def act(obs: np.ndarray) -> int:
        grounded, gap_dx, gap_w = obs[2] > 0.5, obs[4], obs[5]
        return int(grounded and gap_w > 0.0 and 0.0 < gap_dx < HEURISTIC_TRIGGER_DX)
    return act


POLICIES: Dict[str, Callable[[int], Policy]] = {
    "random": random_jumper,
    "heuristic": gap_jumper,
}


def run_episode(policy_name: str, seed: int, frame_skip: int, steps: int,
                trace_dir: Path | None = None) -> Dict[str, object]:
    policy = POLICIES[policy_name](seed)
    env = PotholeEnv(frame_skip=frame_skip)
    actions: List[int] = []
    observations: List[np.ndarray] = []
    total, airborne = 0.0, 0
    term = trunc = False
    try:
        obs, info = env.reset(seed=seed)
        observations.append(obs)
        while len(actions) < steps and not (term or trunc):
            a = policy(obs)
            obs, r, term, trunc, info = env.step(a)
            actions.append(a)
            observations.append(obs)
            total += r
            airborne += not info["grounded"]
    finally:
        env.close()

    if trace_dir is not None:
        trace_dir.mkdir(parents=True, exist_ok=True)
        np.savez_compressed(
            trace_dir / f"{policy_name}_{seed}.npz",
            actions=np.asarray(actions, dtype=np.int8),
            obs=np.asarray(observations, dtype=np.float32),
            level_seed=info["seed"],
        )

    return {
        "policy": policy_name,
        "seed": seed,
        "frame_skip": frame_skip,
        "decisions": len(actions),
        "return": f"{total:.1f}",
        "score": info["score"],
        "final_speed": f"{info['speed']:.3f}",
        "terminated": int(term),
        "truncated": int(trunc),
        "airborne_ratio": f"{airborne / max(1, len(actions)):.3f}",
    }


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--policies", choices=["random", "heuristic", "both"], default="both")
    ap.add_argument("--seeds", type=str, default="",
                    help="Comma-separated seeds (default 101..120)")
    ap.add_argument("--frame-skip", type=int, default=4)
    ap.add_argument("--steps", type=int, default=10_000,
                    help="Cap on decisions per episode (the env truncates at 60 s anyway)")
    ap.add_argument("--out-dir", type=Path, default=Path("experiments/runs"))
    ap.add_argument("--save-traces", action="store_true",
                    help="Write actions and observations per episode as .npz")
    args = ap.parse_args()

    seeds = [int(s) for s in args.seeds.split(",") if s.strip()] or list(range(101, 121))
    policies = list(POLICIES) if args.policies == "both" else [args.policies]
    trace_dir = args.out_dir / "traces" if args.save_traces else None
    args.out_dir.mkdir(parents=True, exist_ok=True)
    episodes_csv = args.out_dir / "episodes.csv"

    print(f"{len(policies)} policies x {len(seeds)} seeds -> {episodes_csv}")
    with episodes_csv.open("w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=FIELDS)
        writer.writeheader()
        for name in policies:
            for seed in seeds:
                row = run_episode(name, seed, args.frame_skip, args.steps, trace_dir)
                writer.writerow(row)
                print(f"[{name}] seed={seed} decisions={row['decisions']} "
                      f"score={row['score']} return={row['return']}")

    print("✓ Sanity rollouts complete")


if __name__ == "__main__":
    main()
