from __future__ import annotations

import argparse
import time
from pathlib import Path

from audiotranslator.audio.mic import MicError, SoundDeviceCapture


def main() -> int:
    p = argparse.ArgumentParser()
    p.add_argument("--device", type=int, default=None, help="sounddevice input device id")
    p.add_argument("--sr", type=int, default=16000, help="sample rate (Hz)")
    p.add_argument("--channels", type=int, default=1, help="input channels")
    p.add_argument("--seconds", type=float, default=5.0, help="recording duration")
    p.add_argument("--out", default="assets/audio/mic_test.wav", help="output WAV path")
    p.add_argument("--list-devices", action="store_true", help="print audio devices and exit")
    args = p.parse_args()

    if args.list_devices:
        print(SoundDeviceCapture.list_devices())
        return 0

    capture = SoundDeviceCapture(sample_rate=args.sr, channels=args.channels, device=args.device)
    print(f"Recording {args.seconds:.1f}s from device={args.device} sr={args.sr} ch={args.channels}...")
    try:
        capture.start()
    except MicError as e:
        print(e)
        return 1
    try:
        t_end = time.time() + args.seconds
        while time.time() < t_end:
            time.sleep(0.25)
            print(f"level={capture.level():3d}")
        artifact = capture.stop()
    except KeyboardInterrupt:
        capture.abort()
        return 130

    out_path = Path(args.out)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_bytes(artifact.data)

    print(f"Saved WAV: {out_path} ({artifact.chunk_count} blocks, {artifact.duration:.1f}s)")
    print("Send it with: python -m audiotranslator.demos.demo_translate_file " + str(out_path))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
