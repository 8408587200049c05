"""
Procedural tree generation.

A tree is a flat tuple of tapered Branch segments in breadth-first order:
the trunk first, then every depth-1 branch, then every depth-2 branch,
and so on. Each branch spawns up to three children:

    LEFT, RIGHT: sprout from the parent's end, turned by +/- pi/6
    MID:         sprouts from an interior point, turned by +/- pi/8

All turns are scaled by the spread multiplier and perturbed by a small
wiggle. Lengths shrink by a random factor per generation and widths
taper multiplicatively, so lineages die out once they fall below
MIN_BRANCH_LENGTH even if depth budget remains.
"""

import enum
import math
from collections import deque
from dataclasses import dataclass, field

from bonsai.config import MIN_BRANCH_LENGTH, TreeParams
from bonsai.geometry import Point, advance, left_normal
from bonsai.rng import RandomSource


BASE_TURN = math.pi / 6
MID_TURN = math.pi / 8
WIGGLE = math.pi / 40

# Terminal children start this many child start-widths back along the parent
OVERLAP_BACKOFF = 0.6


class BranchType(enum.Enum):
    """Where a branch sprouts from relative to its parent."""

    TRUNK = "trunk"
    LEFT = "left"
    RIGHT = "right"
    MID = "mid"


@dataclass(frozen=True)
class Branch:
    """A tapered segment of the tree."""

    start: Point
    end: Point
    angle: float
    length: float
    start_width: float
    end_width: float
    depth: int
    kind: BranchType = BranchType.TRUNK
    parent: int = -1  # Index into Canvas.branches, -1 for the trunk

    @property
    def is_trunk(self) -> bool:
        """The trunk's base is drawn flat so it sits on the ground."""
        return self.kind is BranchType.TRUNK

    @classmethod
    def from_polar(
        cls,
        start: Point,
        angle: float,
        length: float,
        start_width: float,
        end_width: float,
        depth: int,
        kind: BranchType = BranchType.TRUNK,
        parent: int = -1,
    ) -> "Branch":
        """Build a branch from its start point, heading and length."""
        return cls(
            start=start,
            end=advance(start, angle, length),
            angle=angle,
            length=length,
            start_width=start_width,
            end_width=end_width,
            depth=depth,
            kind=kind,
            parent=parent,
        )

    def point_at(self, dist: float) -> Point:
        """Point `dist` pixels along the branch from its start."""
        return advance(self.start, self.angle, dist)


@dataclass
class Canvas:
    """
    One frame's tree: target size, shape parameters, random source and
    the generated branches.
    """

    width: int
    height: int
    params: TreeParams = field(default_factory=TreeParams)
    rand: RandomSource = field(default_factory=RandomSource)
    branches: tuple[Branch, ...] = ()

    @property
    def max_depth(self) -> int:
        return self.params.max_depth

    def generate(self) -> tuple[Branch, ...]:
        """Generate the branches (replacing any previous ones)."""
        trunk = make_trunk(self.width, self.height, self.params, self.rand)
        branches = [trunk]
        queue: deque[tuple[int, int]] = deque([(0, self.params.max_depth)])

        while queue:
            idx, remaining = queue.popleft()
            parent = branches[idx]
            if remaining <= 0 or parent.length < MIN_BRANCH_LENGTH:
                continue
            kinds = [BranchType.LEFT, BranchType.RIGHT]
            if remaining - 1 >= 1:
                kinds.append(BranchType.MID)
            for kind in kinds:
                child = spawn_child(parent, idx, kind, self.params.spread, self.rand)
                queue.append((len(branches), remaining - 1))
                branches.append(child)

        self.branches = tuple(branches)
        return self.branches

    # -------------------------------------------------------------------------
    # Reporting
    # -------------------------------------------------------------------------

    def get_summary(self) -> dict[str, float]:
        """Scalar statistics of the generated tree."""
        if not self.branches:
            return {"Branches": 0}
        xs = [c for b in self.branches for c in (b.start.x, b.end.x)]
        ys = [c for b in self.branches for c in (b.start.y, b.end.y)]
        summary: dict[str, float] = {
            "Branches": len(self.branches),
            "MaxDepth": max(b.depth for b in self.branches),
        }
        for depth in range(self.params.max_depth + 1):
            summary[f"Depth{depth}"] = sum(1 for b in self.branches if b.depth == depth)
        summary.update(
            {
                "TrunkLength": self.branches[0].length,
                "TrunkWidth": self.branches[0].start_width,
                "MinWidth": min(b.end_width for b in self.branches),
                "MinX": min(xs),
                "MaxX": max(xs),
                "MinY": min(ys),
            }
        )
        return summary

    def print_summary(self) -> None:
        """Print a formatted summary table to stdout."""
        summary = self.get_summary()
        print("\n" + "=" * 40)
        print("TREE SUMMARY")
        print("=" * 40)
        for key, value in summary.items():
            if isinstance(value, int):
                print(f"{key:20s}: {value:>10d}")
            else:
                print(f"{key:20s}: {value:>10.3f}")
        print("=" * 40)


def make_trunk(width: int, height: int, params: TreeParams, rand: RandomSource) -> Branch:
    """
    Build the root branch.

    It starts at the bottom edge, on the horizontal center (half-pixel
    offset so even widths stay symmetric), and points up with a little
    jitter.
    """
    start = Point(width / 2 - 0.5, float(height))
    angle = math.pi / 2 + 0.2 * (rand.float64() - 0.5)
    length = height * params.trunk_height_pct / 100
    base_width = width * params.trunk_width_pct / 100
    start_width = base_width * (0.9 + 0.2 * rand.float64())
    end_width = start_width * (0.6 + 0.2 * rand.float64())
    return Branch.from_polar(start, angle, length, start_width, end_width, depth=0)


def spawn_child(
    parent: Branch,
    parent_idx: int,
    kind: BranchType,
    spread: float,
    rand: RandomSource,
) -> Branch:
    """
    Create one child of `parent`.

    LEFT/RIGHT children are pulled back into the parent's tapered end
    and shifted sideways by half the width difference so their edges
    line up with the parent's edge. MID children start from a random
    interior point and are not corrected.
    """
    if kind is BranchType.MID:
        sign = 1.0 if rand.float64() < 0.5 else -1.0
        turn = sign * MID_TURN
        anchor = parent.point_at(parent.length * (0.3 + 0.3 * rand.float64()))
    elif kind is BranchType.LEFT:
        turn = BASE_TURN
        anchor = parent.end
    else:
        turn = -BASE_TURN
        anchor = parent.end

    wiggle = (2 * rand.float64() - 1) * WIGGLE
    angle = parent.angle + (turn + wiggle) * spread
    length = parent.length * (0.4 + 0.5 * rand.float64())
    start_width = parent.end_width * (0.6 + 0.2 * rand.float64())
    end_width = start_width * (0.6 + 0.2 * rand.float64())

    if kind is not BranchType.MID:
        anchor = overlap_corrected(parent, anchor, start_width, kind)

    return Branch.from_polar(
        anchor,
        angle,
        length,
        start_width,
        end_width,
        depth=parent.depth + 1,
        kind=kind,
        parent=parent_idx,
    )


def overlap_corrected(parent: Branch, anchor: Point, child_width: float, kind: BranchType) -> Point:
    """Move a terminal child's start so it abuts the parent's tapered end."""
    back = advance(anchor, parent.angle, -OVERLAP_BACKOFF * child_width)
    side = (parent.end_width - child_width) / 2
    if kind is BranchType.RIGHT:
        side = -side
    normal = left_normal(parent.angle)
    return Point(back.x + normal.x * side, back.y + normal.y * side)


def generate_tree(
    width: int,
    height: int,
    params: TreeParams | None = None,
    rand: RandomSource | None = None,
) -> Canvas:
    """
    Generate a complete tree for a width x height canvas.

    Args:
        width: Canvas width in pixels
        height: Canvas height in pixels
        params: Shape parameters (defaults if None)
        rand: Random source (fresh system-seeded source if None)

    Returns:
        Canvas whose `branches` holds the tree in breadth-first order
    """
    canvas = Canvas(
        width=width,
        height=height,
        params=params if params is not None else TreeParams(),
        rand=rand if rand is not None else RandomSource(),
    )
    canvas.generate()
    return canvas
