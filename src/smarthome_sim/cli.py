"""Interactive console for the smart-home simulator."""

from __future__ import annotations

import argparse
from collections.abc import Callable, Iterable
from dataclasses import replace

from .config import settings
from .controller import HomeController
from .policies import POLICY_KINDS
from .strategies import THERMOSTAT_MODES
from .utils import configure_logging, logger, parse_on_off

configure_logging()

InputFn = Callable[[str], str]
PrintFn = Callable[[str], None]

HELP_TEXT = """
==================================================
COMMANDS
==================================================
  list                      Show every device
  add                       Add a device (prompts for type and name)
  remove <name>             Remove a device
  sensor                    Trigger an environmental change
  mode <name> <eco|comfort> Change a thermostat's mode
  schedule                  Schedule a device action (prompts)
  tick [n]                  Advance simulated time by n ticks
  tasks                     Show scheduled tasks
  reset                     Clear scheduled tasks and rewind time
  history                   Show recent events
  help                      Show this menu
  exit                      Quit
  <device name>             Toggle that device
=================================================="""


def _show_help(
    _controller: HomeController, _input_fn: InputFn, print_fn: PrintFn
) -> None:
    print_fn(HELP_TEXT)


def _show_devices(
    controller: HomeController, _input_fn: InputFn, print_fn: PrintFn
) -> None:
    rows = controller.status()
    if not rows:
        print_fn("No devices registered.")
        return
    print_fn(f"Devices at tick {controller.tick}:")
    for device_type, name, state in rows:
        print_fn(f" - {name} ({device_type}): {state}")


def _show_tasks(
    controller: HomeController, _input_fn: InputFn, print_fn: PrintFn
) -> None:
    tasks = controller.scheduler.tasks
    if not tasks:
        print_fn("No scheduled tasks.")
        return
    for index, task in enumerate(tasks, start=1):
        print_fn(f" {index}. {task.describe()}")


def _show_history(
    controller: HomeController, _input_fn: InputFn, print_fn: PrintFn
) -> None:
    events = controller.events.list_recent(10)
    if not events:
        print_fn("No events recorded.")
        return
    for event in reversed(events):
        subject = f" {event.subject_id}" if event.subject_id else ""
        print_fn(f" [tick {event.tick}] {event.action}{subject}")


def _trigger_sensor(
    controller: HomeController, _input_fn: InputFn, print_fn: PrintFn
) -> None:
    print_fn("[Sensor] Environmental change triggered!")
    for device in controller.trigger_sensor():
        print_fn(f"Notifying {device.name}... target {device.target_temperature}°F")


def _reset(
    controller: HomeController, _input_fn: InputFn, print_fn: PrintFn
) -> None:
    controller.reset()
    print_fn("[Scheduler] All scheduled tasks cleared.")


def _add_device(
    controller: HomeController, input_fn: InputFn, print_fn: PrintFn
) -> None:
    type_name = input_fn("Enter device type (Light/Fan/Thermostat): ").strip()
    name = input_fn("Enter device name: ").strip()
    if not name:
        print_fn("[Error] Device name is required.")
        return
    try:
        device = controller.add_device(type_name, name)
    except ValueError as exc:
        print_fn(f"[Error] {exc}")
        return
    if device is None:
        print_fn("[Error] Invalid device type. Valid types: Light, Fan, Thermostat.")
        return
    print_fn(f'[System] {device.device_type} "{name}" added successfully.')


def _schedule(
    controller: HomeController, input_fn: InputFn, print_fn: PrintFn
) -> None:
    name = input_fn("Enter device name: ").strip()
    if not name:
        print_fn("[Error] Device name is required.")
        return
    try:
        turn_on = parse_on_off(input_fn("Turn on or off? "))
    except ValueError as exc:
        print_fn(f"[Error] {exc}")
        return
    kind = input_fn(f"Enter schedule kind ({'/'.join(POLICY_KINDS)}): ").strip()
    prompts = {
        "one-time": "Enter trigger tick: ",
        "periodic": "Enter interval in ticks: ",
        "delayed": "Enter delay in ticks: ",
    }
    raw_value = input_fn(prompts.get(kind, "Enter time value: ")).strip()
    try:
        value = int(raw_value)
    except ValueError:
        print_fn(f"[Error] Time value must be an integer, got '{raw_value}'.")
        return

    if controller.schedule(name, turn_on, kind, value):
        print_fn(f'[Scheduler] Task for "{name}" scheduled ({kind}).')
    else:
        print_fn(
            "[Error] Scheduling request rejected. Valid kinds: "
            f"{', '.join(POLICY_KINDS)}; periodic intervals must be positive."
        )


def _tick(
    controller: HomeController, raw_steps: str | None, print_fn: PrintFn
) -> None:
    steps = None
    if raw_steps is not None:
        try:
            steps = int(raw_steps)
        except ValueError:
            print_fn(f"[Error] Tick count must be an integer, got '{raw_steps}'.")
            return
    try:
        tick = controller.advance(steps)
    except ValueError as exc:
        print_fn(f"[Error] {exc}")
        return
    print_fn(f"[Clock] Tick {tick}")


def _advance_default(
    controller: HomeController, _input_fn: InputFn, print_fn: PrintFn
) -> None:
    _tick(controller, None, print_fn)


_BARE_COMMANDS: dict[str, Callable[[HomeController, InputFn, PrintFn], None]] = {
    "help": _show_help,
    "list": _show_devices,
    "add": _add_device,
    "sensor": _trigger_sensor,
    "schedule": _schedule,
    "tick": _advance_default,
    "tasks": _show_tasks,
    "reset": _reset,
    "history": _show_history,
}


def handle_command(
    controller: HomeController,
    command: str,
    *,
    input_fn: InputFn = input,
    print_fn: PrintFn = print,
) -> bool:
    """Execute one console command. Returns False when the session should end.

    Bare command words only match a whole line, and a registered device name
    wins over the commands that take arguments.
    """
    word = command.lower()
    if word in {"exit", "quit"}:
        return False
    if word in _BARE_COMMANDS:
        _BARE_COMMANDS[word](controller, input_fn, print_fn)
        return True
    if controller.toggle_device(command) is not None:
        return True

    keyword, _, rest = command.partition(" ")
    keyword = keyword.lower()
    rest = rest.strip()
    if keyword == "remove" and rest:
        if controller.remove_device(rest):
            print_fn(f'[System] "{rest}" removed.')
        else:
            print_fn(f'Device "{rest}" not found!')
    elif keyword == "mode" and len(rest.split()) >= 2:
        name, mode = rest.rsplit(" ", 1)
        name = name.strip()
        try:
            changed = controller.set_thermostat_mode(name, mode)
        except ValueError as exc:
            print_fn(f"[Error] {exc}")
            return True
        if changed:
            print_fn(f'[Thermostat] "{name}" set to {mode.lower()} mode.')
        else:
            print_fn(f'Thermostat "{name}" not found!')
    elif keyword == "tick" and rest:
        _tick(controller, rest.split()[0], print_fn)
    else:
        print_fn(f'Device "{command}" not found!')
    return True


def run(
    controller: HomeController | None = None,
    *,
    input_fn: InputFn = input,
    print_fn: PrintFn = print,
) -> HomeController:
    """Read commands until ``exit``, end of input or Ctrl-C."""
    if controller is None:
        controller = HomeController(print_fn=print_fn)

    logger.bind(devices=len(controller.repository)).info("Starting console session")
    print_fn("Smart Home Simulator (type 'help' for commands)")

    running = True
    while running:
        try:
            command = input_fn(
                "\nEnter command ('add', device name to toggle, or 'exit'): "
            ).strip()
        except (EOFError, KeyboardInterrupt):
            print_fn("\nExiting...")
            break
        if not command:
            continue
        running = handle_command(
            controller, command, input_fn=input_fn, print_fn=print_fn
        )

    logger.bind(tick=controller.tick).info("Console session finished")
    return controller


def main(argv: Iterable[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        description="Simulate a small smart-home network from the console."
    )
    parser.add_argument(
        "--no-seed",
        action="store_true",
        help="Start without the default living room light, fan and thermostat.",
    )
    parser.add_argument(
        "--thermostat-mode",
        choices=THERMOSTAT_MODES,
        help="Default mode for new thermostats (overrides SMARTHOME_THERMOSTAT_MODE).",
    )
    args = parser.parse_args(list(argv) if argv is not None else None)

    config = settings
    if args.no_seed:
        config = replace(config, seed_devices=False)
    if args.thermostat_mode:
        config = replace(config, thermostat_mode=args.thermostat_mode)
    run(HomeController(config=config))


__all__ = ["HELP_TEXT", "handle_command", "main", "run"]
