import sys
import argparse

import torch

from lifegrid import zoo
from lifegrid.errors import LifeGridError
from lifegrid.model import World
from lifegrid.constants import (DEFAULT_SIZE, DEFAULT_INTERVAL, DEFAULT_INITIAL_DENSITY,
                            DEFAULT_FRAME_SKIP, DEFAULT_STEPS, DEFAULT_PATTERN, MAX_PRINT_SIZE)

PATTERN_CHOICES = ['random'] + sorted(zoo.PATTERNS)


def print_cuda_info():
    """Print information about CUDA configuration."""
    print("\n=== CUDA Configuration ===")
    print(f"PyTorch version: {torch.__version__}")
    print(f"CUDA available: {torch.cuda.is_available()}")
    print(f"CUDA version: {torch.version.cuda if torch.cuda.is_available() else 'N/A'}")
    print(f"cuDNN version: {torch.backends.cudnn.version() if torch.cuda.is_available() else 'N/A'}")
    print(f"GPU device count: {torch.cuda.device_count() if torch.cuda.is_available() else 0}")
    if torch.cuda.is_available():
        print(f"Current GPU device: {torch.cuda.current_device()}")
        print(f"GPU device name: {torch.cuda.get_device_name(0)}")
    print("========================\n")


def build_parser():
    parser = argparse.ArgumentParser(description="Conway's Game of Life on a finite grid")
    parser.add_argument("--size", type=int, default=None, help="Grid width and height (overridden by --width/--height)")
    parser.add_argument("--width", type=int, default=None, help="Grid width")
    parser.add_argument("--height", type=int, default=None, help="Grid height")
    parser.add_argument("--pattern", type=str, default=DEFAULT_PATTERN, choices=PATTERN_CHOICES,
                        help="Initial pattern, centred in the grid")
    parser.add_argument("--load", type=str, default=None, help="Load the initial grid from a .gol or .bgol file")
    parser.add_argument("--save", type=str, default=None, help="Save the final grid to a .gol or .bgol file (headless only)")
    parser.add_argument("--density", type=float, default=DEFAULT_INITIAL_DENSITY, help="Initial density of live cells for random grids")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for random grids")
    parser.add_argument("--steps", type=int, default=DEFAULT_STEPS, help="Generations to run (headless only)")
    parser.add_argument("--toroidal", action='store_true', help="Wrap the grid edges around")
    parser.add_argument("--interval", type=int, default=DEFAULT_INTERVAL, help="Update interval in milliseconds")
    parser.add_argument("--frame_skip", type=int, default=DEFAULT_FRAME_SKIP, help="Number of generations per frame")
    parser.add_argument("--device", type=str, default='cuda' if torch.cuda.is_available() else 'cpu',
                       choices=['cuda', 'cpu'], help="Computation device ('cuda' or 'cpu')")
    parser.add_argument("--no_gui", action='store_true',
                       help="Run the simulation headless and print the result, skipping the GUI")
    return parser


def resolve_size(args):
    size = args.size if args.size is not None else DEFAULT_SIZE
    width = args.width if args.width is not None else size
    height = args.height if args.height is not None else size
    return width, height


def build_initial_grid(width, height, pattern=DEFAULT_PATTERN, density=DEFAULT_INITIAL_DENSITY,
                       seed=None, load_path=None, device='cpu'):
    """Pick the starting grid: a file if given, else a named pattern, else random soup."""
    if load_path is not None:
        return zoo.load(load_path)
    if pattern == 'random':
        return zoo.random_grid(width, height, density, seed=seed, device=device)
    return zoo.centred(zoo.PATTERNS[pattern](), width, height)


def run_headless(world, steps, toroidal=False, save_path=None):
    world.advance(steps, toroidal)

    state = world.get_state()
    if state.width <= MAX_PRINT_SIZE and state.height <= MAX_PRINT_SIZE:
        print(state, end='')
    print(f"Generation: {steps}")
    print(f"Live Cells: {world.alive_count()} / {world.total_cells} (dead: {world.dead_count()})")

    if save_path is not None:
        zoo.save(save_path, state)
        print(f"Saved final grid to {save_path}")
    return state


def run_gui(args, width, height):
    from PyQt5.QtWidgets import QApplication, QDialog
    from lifegrid.settings import SettingsDialog
    from lifegrid.view import animate_world

    app = QApplication([])

    settings = SettingsDialog()
    settings.width_spin.setValue(width)
    settings.height_spin.setValue(height)
    settings.pattern_combo.setCurrentIndex(settings.pattern_combo.findData(args.pattern))
    settings.density_spin.setValue(args.density)
    settings.toroidal_check.setChecked(args.toroidal)
    settings.interval_spin.setValue(args.interval)
    settings.frame_skip_spin.setValue(args.frame_skip)
    if args.device == 'cuda' and torch.cuda.is_available():
        settings.device_combo.setCurrentIndex(settings.device_combo.findData('cuda'))
    else:
        settings.device_combo.setCurrentIndex(settings.device_combo.findData('cpu'))

    if settings.exec_() != QDialog.Accepted:
        return

    device_text = settings.device_combo.currentData()
    initial = build_initial_grid(
        settings.width_spin.value(),
        settings.height_spin.value(),
        pattern=settings.pattern_combo.currentData(),
        density=settings.density_spin.value(),
        seed=args.seed,
        load_path=args.load,
        device=device_text,
    )
    world = World(initial_state=initial, device=device_text)

    animate_world(
        world=world,
        interval=settings.interval_spin.value(),
        frame_skip=settings.frame_skip_spin.value(),
        toroidal=settings.toroidal_check.isChecked(),
    )


def main(argv=None):
    args = build_parser().parse_args(argv)
    width, height = resolve_size(args)

    try:
        if args.no_gui:
            device_text = args.device
            if device_text == 'cuda' and not torch.cuda.is_available():
                print("Warning: CUDA requested but not available, falling back to CPU.")
                device_text = 'cpu'

            initial = build_initial_grid(width, height, args.pattern, args.density,
                                         seed=args.seed, load_path=args.load, device=device_text)

            print("\n--- Running with Command-Line Settings --- ")
            print(f"Size: {initial.width}x{initial.height}, Steps: {args.steps}, Toroidal: {args.toroidal}")
            print(f"Device: {device_text}, Source: {args.load or args.pattern}")
            print("----------------------------------------\n")

            world = World(initial_state=initial, device=device_text)
            run_headless(world, args.steps, args.toroidal, args.save)
        else:
            print_cuda_info()
            run_gui(args, width, height)
    except LifeGridError as err:
        print(f"Error: {err}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
