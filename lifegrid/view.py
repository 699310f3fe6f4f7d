import numpy as np
import vispy
import vispy.scene
from vispy.scene import visuals
from vispy.color import ColorArray
from PyQt5.QtCore import Qt
import vispy.app

from .constants import (DEFAULT_INTERVAL, STABILITY_THRESHOLD, WINDOW_SIZE,
                      MARKER_MIN_SIZE, MARKER_MAX_SIZE, MARKER_SCALE_FACTOR,
                      FLOOR_COLOR, AGE_YOUNG_THRESHOLD, AGE_MIDDLE_THRESHOLD,
                      AGE_OLD_THRESHOLD, COLORS)


def get_color(age):
    # Use a non-linear scale: very quick initial phase, longer taper
    if age < AGE_YOUNG_THRESHOLD:  # Quick initial phase (0-20)
        normalized_age = age / AGE_YOUNG_THRESHOLD
        if normalized_age < 0.1:
            return COLORS['very_young']
        elif normalized_age < 0.3:
            return COLORS['young']
        elif normalized_age < 0.6:
            return COLORS['young_adult']
        elif normalized_age < 0.8:
            return COLORS['adult']
        else:
            return COLORS['mature']
    elif age < AGE_MIDDLE_THRESHOLD:  # Middle phase (20-50)
        normalized_age = (age - AGE_YOUNG_THRESHOLD) / (AGE_MIDDLE_THRESHOLD - AGE_YOUNG_THRESHOLD)
        if normalized_age < 0.5:
            return COLORS['middle_aged']
        else:
            return COLORS['older']
    elif age < AGE_OLD_THRESHOLD:
        return COLORS['old']
    else:
        return COLORS['ancient']


def update_ages(age_grid, grid):
    """Count how many consecutive generations each cell has been alive."""
    return np.where(grid == 1, age_grid + 1, 0)


def animate_world(world, interval=DEFAULT_INTERVAL, frame_skip=1, toroidal=False):
    """
    Create and manage the 3D visualization of a running World.

    Args:
        world: The World to animate
        interval: Update interval in milliseconds
        frame_skip: Number of generations per frame
        toroidal: Wrap the edges of the world when stepping
    """
    if frame_skip < 1:
        raise ValueError("frame_skip must be at least 1")
    if interval <= 0:
        raise ValueError("interval must be positive")

    width, height = world.width, world.height
    size = max(width, height)

    # Create a canvas and view
    canvas = vispy.scene.SceneCanvas(keys='interactive', size=WINDOW_SIZE, resizable=True, show=True)
    canvas.native.setWindowState(Qt.WindowMaximized)
    view = canvas.central_widget.add_view()
    view.camera = 'turntable'
    view.camera.fov = 45

    # Create text display for generation counter and status
    text = visuals.Text('Generation: 0\nLive Cells: 0\nPress SPACE to start', pos=(100, 50), color='white', font_size=12, parent=canvas.scene)
    text.order = 1  # Ensure text is drawn on top

    scatter = visuals.Markers()
    view.add(scatter)

    # Initialize with empty data
    pos = np.zeros((1, 3))
    colors = np.array([(0, 0, 0, 0)])  # Transparent
    scatter.set_data(pos, edge_color=None, face_color=colors, size=10)

    # Create floor
    floor_vertices = np.array([
        [0, 0, 0],
        [width, 0, 0],
        [width, height, 0],
        [0, height, 0]
    ])
    floor_faces = np.array([[0, 1, 2], [0, 2, 3]])
    floor = visuals.Mesh(vertices=floor_vertices, faces=floor_faces, color=FLOOR_COLOR)
    view.add(floor)

    # Set up the view
    view.camera.set_range()
    view.camera.elevation = 20
    view.camera.azimuth = -45
    view.camera.distance = size * 1.5

    running = False
    generation = 0
    age_grid = update_ages(np.zeros((height, width), dtype=np.int64), world.get_grid())

    # Stability detection variables
    previous_cell_count = -1
    stable_generations = 0

    def draw(grid):
        # Rows run along y, columns along x
        live_ys, live_xs = np.nonzero(grid == 1)
        live_zs = np.full_like(live_xs, 0.1, dtype=float)
        live_ages = age_grid[grid == 1]

        pos = np.column_stack((live_xs, live_ys, live_zs))
        colors = ColorArray([get_color(age) for age in live_ages]) if len(pos) > 0 else np.array([(0, 0, 0, 0)])

        # Closer markers are drawn bigger
        cam = view.camera
        cam_pos = np.array(cam.transform.map([0, 0, cam.distance, 1])[:3])
        if len(pos) > 0:
            distances = np.linalg.norm(pos - cam_pos, axis=1)
            sizes = np.clip(MARKER_SCALE_FACTOR / (distances + 1), MARKER_MIN_SIZE, MARKER_MAX_SIZE)
        else:
            pos = np.zeros((1, 3))
            sizes = MARKER_MIN_SIZE

        scatter.set_data(pos, edge_color=None, face_color=colors, size=sizes)
        canvas.update()

    def update(ev):
        nonlocal running, generation, age_grid, previous_cell_count, stable_generations
        if not running:
            return

        if stable_generations >= STABILITY_THRESHOLD:
            running = False
            text.text = f'STABLE AFTER {generation} GENERATIONS\nLive Cells: {previous_cell_count}\nPress SPACE to restart'
            print(f"Simulation stabilized after {generation - STABILITY_THRESHOLD} generations with {previous_cell_count} cells")
            return

        for _ in range(frame_skip):
            world.step(toroidal)
            generation += 1
            age_grid = update_ages(age_grid, world.get_grid())

        grid = world.get_grid()
        live_cells = int(grid.sum())

        if live_cells == previous_cell_count:
            stable_generations += 1
        else:
            stable_generations = 0
            previous_cell_count = live_cells

        text.text = f'Generation: {generation}\nLive Cells: {live_cells}'
        draw(grid)

    def on_key_press(event):
        nonlocal running, previous_cell_count, stable_generations
        if event.key == ' ':
            if not running:
                # Reset stability detection if restarting
                stable_generations = 0
                previous_cell_count = -1

            running = not running
            live_cells = world.alive_count()
            if running:
                text.text = f'Generation: {generation}\nLive Cells: {live_cells}'
            else:
                text.text = f'Generation: {generation}\nLive Cells: {live_cells}\nPress SPACE to start'

    canvas.events.key_press.connect(on_key_press)
    draw(world.get_grid())

    timer = vispy.app.Timer(interval=interval/1000.0)  # Convert ms to seconds
    timer.connect(update)
    timer.start()

    vispy.app.run()
