"""
Interactive demo: type `marco` to unlock the secret.

The machine knows nothing about stdin; this driver feeds each line to
`Machine.run()` and stops when the machine emits `success`.
"""

from __future__ import annotations

import sys

from chine import Machine, StateBuilder, StateContext


def _initial(state: StateBuilder) -> None:
    state.name("initial").incoming("wait for username").outgoing("wait for username")

    # Run as soon as the machine comes back here.
    state.enter(lambda ctx: ctx.run())

    def prompt(ctx: StateContext) -> None:
        print("Enter username")  # noqa: T201
        ctx.transition("wait for username")

    state.run(prompt)


def _wait_for_username(state: StateBuilder) -> None:
    state.name("wait for username").incoming("initial").outgoing("success", "initial")

    def check(ctx: StateContext, line: str) -> None:
        if line.strip() == "marco":
            print("Congratulations! You unlock the secret")  # noqa: T201
            ctx.transition("success")
        else:
            print("Invalid username. No prize for you.\n")  # noqa: T201
            ctx.transition("initial")

    state.run(check)


def _success(state: StateBuilder) -> None:
    state.name("success").incoming("wait for username")
    state.enter(lambda ctx: ctx.emit("success"))


def build_machine() -> Machine:
    return Machine("initial").state(_initial).state(_wait_for_username).state(_success)


def main() -> int:
    fsm = build_machine().compile()

    done = False

    def on_success() -> None:
        nonlocal done
        print("Closing down. Goodbye!")  # noqa: T201
        done = True

    fsm.on("success", on_success)
    fsm.run()

    for line in sys.stdin:
        fsm.run(line.rstrip("\n"))
        if done:
            break
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
