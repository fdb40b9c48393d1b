"""
Frame Clock
===========

External scheduler for layout engines.

GUARANTEES:
- One frame steps every registered engine once, in registration order
- Engines that do not step (settled or switched off) republish their current
  node state, so pins and drags in an idle view still reach its peers
- Snapshot channels are committed only after all engines have stepped, so
  every engine reads its peers' previous frame whatever the order
- Never reads wall-clock time; frames are counted, not timed
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable, List

if TYPE_CHECKING:
    from .engine import ForceLayoutEngine


@dataclass
class FrameClock:
    """
    Drives any number of engines frame by frame.

    `frame_log[i]` is the number of engines that stepped in frame i.
    """
    engines: List[ForceLayoutEngine] = field(default_factory=list)
    frame_log: List[int] = field(default_factory=list)

    @classmethod
    def of(cls, engines: Iterable[ForceLayoutEngine]) -> FrameClock:
        return cls(engines=list(engines))

    def register(self, engine: ForceLayoutEngine) -> None:
        if engine not in self.engines:
            self.engines.append(engine)

    def unregister(self, engine: ForceLayoutEngine) -> None:
        if engine in self.engines:
            self.engines.remove(engine)

    @property
    def frame_count(self) -> int:
        return len(self.frame_log)

    @property
    def any_running(self) -> bool:
        return any(engine.is_running for engine in self.engines)

    def tick(self) -> int:
        """Run one frame. Returns the number of engines that stepped."""
        stepped = 0
        for engine in self.engines:
            if engine.step():
                stepped += 1
            else:
                engine.publish()
        for engine in self.engines:
            engine.commit()
        self.frame_log.append(stepped)
        return stepped

    def run(self, frames: int) -> int:
        for _ in range(frames):
            self.tick()
        return frames

    def run_until_settled(self, max_frames: int) -> int:
        """Tick until no engine is running or the limit is hit; returns frames run."""
        frames = 0
        while frames < max_frames and self.any_running:
            self.tick()
            frames += 1
        return frames
