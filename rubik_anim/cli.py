"""CLI entrypoint for the cube animation engine."""

from __future__ import annotations

import argparse
import json
from dataclasses import replace

from .config import ConfigError, EngineConfig, load_config
from .engine import CubeAnimationEngine
from .geometry import SIGN_CONVENTIONS


def _load_engine_config(args) -> EngineConfig:
    cfg = load_config(args.config) if args.config else EngineConfig()
    if args.overshoot:
        cfg = replace(cfg, overshoot=True)
    if args.sign_convention is not None:
        cfg = replace(cfg, sign_convention=args.sign_convention)
    return cfg.validate()


def _format_event(event, engine: CubeAnimationEngine) -> str:
    face = event.face.value if event.face is not None else "-"
    if event.kind == "commit":
        nxt = engine.sequence[event.sequence_index].value
        return f"commit face={face} turn={engine.turn_count} next={nxt}"
    if event.kind == "start":
        return f"start face={face} sequence_index={event.sequence_index}"
    return f"sequence_pause turns={engine.turn_count}"


def run_headless(engine: CubeAnimationEngine, seconds: float, fps: int, verbose: bool = True) -> dict:
    dt = 1.0 / fps
    frames = int(round(seconds * fps))
    frame = engine.frame()
    for _ in range(frames):
        frame = engine.update(dt)
        if verbose:
            for event in engine.last_events:
                print(_format_event(event, engine), flush=True)

    payload = engine.status_payload()
    payload["frames"] = frames
    payload["config"] = engine.config.to_dict()
    payload["positions"] = frame.positions.tolist()
    payload["orientations"] = frame.orientations.tolist()
    payload["group_orientation"] = frame.group_orientation.tolist()
    return payload


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Self-running 3x3 cube animation")
    sub = parser.add_subparsers(dest="mode", required=True)

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--config", type=str, default=None, help="YAML engine config")
    common.add_argument("--overshoot", action="store_true", help="Swing past 90 degrees before each commit")
    common.add_argument("--sign-convention", choices=sorted(SIGN_CONVENTIONS), default=None)
    common.add_argument("--fps", type=int, default=60)

    headless = sub.add_parser("headless", parents=[common], help="Step the engine without a window")
    headless.add_argument("--seconds", type=float, default=12.0)
    headless.add_argument("--dump-json", type=str, default=None)
    headless.add_argument("--quiet", action="store_true")

    gui = sub.add_parser("gui", parents=[common], help="Run the pygame viewer")
    gui.add_argument("--width", type=int, default=960)
    gui.add_argument("--height", type=int, default=640)

    return parser


def main(argv: list[str] | None = None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.fps <= 0:
        parser.error("--fps must be positive")
    try:
        cfg = _load_engine_config(args)
    except ConfigError as exc:
        parser.error(str(exc))

    engine = CubeAnimationEngine(cfg)

    if args.mode == "headless":
        payload = run_headless(engine, seconds=args.seconds, fps=args.fps, verbose=not args.quiet)
        print(
            f"headless_done frames={payload['frames']} turns={payload['turn_count']} "
            f"phase={payload['phase']} face={payload['face']}",
            flush=True,
        )
        if args.dump_json:
            with open(args.dump_json, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2)
            print(f"Saved: {args.dump_json}", flush=True)
        return

    if args.mode == "gui":
        from .viewer import CubeViewer

        app = CubeViewer(engine=engine, size=(args.width, args.height), fps=args.fps)
        app.run()
        return

    parser.error(f"Unsupported mode: {args.mode}")


if __name__ == "__main__":
    main()
