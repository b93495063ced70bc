"""Command sequencer: ordered, guarded, fail-fast composition of commands."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Iterable, Mapping, Optional

if TYPE_CHECKING:
    from compass_harness.core.chain import Chain

Guard = Callable[[], Any]


@dataclass
class SequenceStep:
    """One command invocation, skipped entirely when its guard is false."""

    name: str
    args: tuple[Any, ...] = ()
    kwargs: dict[str, Any] = field(default_factory=dict)
    guard: Optional[Guard] = None

    def selected(self) -> bool:
        return self.guard is None or bool(self.guard())

    def describe(self) -> str:
        parts = [repr(a) for a in self.args]
        parts += [f"{k}={v!r}" for k, v in self.kwargs.items()]
        return f"{self.name}({', '.join(parts)})"


def step(name: str, *args: Any, when: Optional[Guard] = None, **kwargs: Any) -> SequenceStep:
    return SequenceStep(name=name, args=args, kwargs=kwargs, guard=when)


def field_steps(
    model: Mapping[str, Any],
    fields: Iterable[str],
    selector_format: str = "input[name={field}]",
) -> list[SequenceStep]:
    """One guarded ``set_value`` step per field present (truthy) in *model*."""
    return [
        step(
            "set_value",
            selector_format.format(field=f),
            model.get(f),
            when=lambda f=f: model.get(f),
        )
        for f in fields
    ]


async def run_sequence(chain: Chain, steps: Iterable[SequenceStep]) -> list[Any]:
    """Run the selected steps in order, one at a time.

    Guards are evaluated and every selected step is resolved against the
    chain before the first one runs, so an unknown name or bad arguments
    fail without side effects. The first failing step's exception
    propagates unchanged and nothing after it runs.
    """
    calls = [chain.resolve(s.name, *s.args, **s.kwargs) for s in steps if s.selected()]
    results = []
    for call in calls:
        results.append(await call())
    return results
