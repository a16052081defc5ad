#!/usr/bin/env python3
# poc_scripts/poc_sun_shadow_preview.py

import os
import sys
import logging
import shutil
import numpy as np
from datetime import datetime, timedelta, timezone
from typing import List, Optional, Tuple

import imageio.v2 as imageio
# Matplotlib imports
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from mpl_toolkits.mplot3d.art3d import Poly3DCollection

# Ensure the project root is in the Python path
SCRIPT_DIR = os.path.dirname(os.path.abspath(__file__))
PROJECT_ROOT = os.path.dirname(SCRIPT_DIR)
sys.path.append(PROJECT_ROOT)

from sunshadow.app.simulator_state import SimulatorState
from sunshadow.config import load_config
from sunshadow.logging_config import setup_logging
from sunshadow.scene.scene_composer import SceneFrame
from sunshadow.scene.shape_meshes import shape_to_mesh, project_shadow_on_ground

# --- Configuration ---
CONFIG_PATH = os.path.join(PROJECT_ROOT, "config", "default_scene.yaml")
PREVIEW_DATE = datetime(2024, 6, 21, tzinfo=timezone.utc)
ANIMATION_START_HOUR_UTC = 0   # 08:00 Shanghai
ANIMATION_END_HOUR_UTC = 10    # 18:00 Shanghai
ANIMATION_FRAMES_DIR = os.path.join(SCRIPT_DIR, "preview_frames")
ANIMATION_OUTPUT_FILENAME = "sun_shadow_day.gif"
FRAMES_PER_SECOND_GIF = 4
CAMERA_ELEV_AZIM = (35, -45)

logger = logging.getLogger("sunshadow.preview")


def build_demo_scene(state: SimulatorState) -> None:
    """A box, an elevated sphere and a cone spread over the ground."""
    box = state.add_shape("box")
    state.update_shape(box.id, width=2.0, depth=1.0, height=3.0, position=[-2.5, 1.0, 0.0])

    sphere = state.add_shape("sphere")
    state.update_shape(sphere.id, radius=0.8, position=[2.0, 2.0, 1.5])

    cone = state.add_shape("cylinder")
    state.update_shape(cone.id, radius_top=0.0, radius_bottom=1.0, height=2.5, position=[1.5, -2.5, 0.0],
                       rotation=[0.0, 0.0, np.pi / 6])


def visualize_frame(state: SimulatorState, frame: SceneFrame, scene_title: str,
                    camera_elev_azim: Tuple[float, float] = CAMERA_ELEV_AZIM,
                    save_path: Optional[str] = None) -> None:
    fig = plt.figure(figsize=(10, 8))
    ax = fig.add_subplot(111, projection='3d')
    plot_half_range = frame.light.frustum.right

    # Ground
    g = plot_half_range
    ax.add_collection3d(Poly3DCollection([[(-g, -g, 0), (g, -g, 0), (g, g, 0), (-g, g, 0)]],
                                         facecolors='whitesmoke', edgecolor='lightgray', alpha=0.6))

    for shape in state.shapes:
        mesh = shape_to_mesh(shape)
        if mesh is None:
            continue
        if shape.cast_shadow:
            shadow_triangles = project_shadow_on_ground(mesh, frame.light.position)
            if len(shadow_triangles):
                ground_triangles = np.concatenate(
                    [shadow_triangles, np.full(shadow_triangles.shape[:2] + (1,), 0.005)], axis=2)
                ax.add_collection3d(Poly3DCollection(ground_triangles, facecolors='dimgray',
                                                     edgecolor='none', alpha=0.35))
        ax.add_collection3d(Poly3DCollection(mesh.vertices[mesh.faces], facecolors=frame.material.color,
                                             edgecolor='k', linewidths=0.2, alpha=0.95))

    # Sun marker and sunlight direction
    sun = frame.sun_marker.position
    ax.scatter([sun[0]], [sun[1]], [sun[2]], color='gold', s=120, depthshade=False)
    ray = frame.light.target - frame.light.position
    ax.quiver(sun[0], sun[1], sun[2], ray[0], ray[1], ray[2], length=0.8, normalize=False,
              color='orange', arrow_length_ratio=0.05)

    # World axes (RGB for XYZ) and labels
    axis_len = plot_half_range * 0.5
    ax.quiver(0, 0, 0, 1, 0, 0, length=axis_len, color='red', arrow_length_ratio=0.1)
    ax.quiver(0, 0, 0, 0, 1, 0, length=axis_len, color='green', arrow_length_ratio=0.1)
    ax.quiver(0, 0, 0, 0, 0, 1, length=axis_len, color='blue', arrow_length_ratio=0.1)
    for label in frame.labels:
        ax.text(label.position[0], label.position[1], label.position[2], label.text, fontsize=8)

    ax.set_xlim(-plot_half_range, plot_half_range)
    ax.set_ylim(-plot_half_range, plot_half_range)
    ax.set_zlim(0, plot_half_range)
    ax.set_xlabel("X (East)")
    ax.set_ylabel("Y (North)")
    ax.set_zlabel("Z (Up)")
    ax.set_title(scene_title)
    ax.view_init(elev=camera_elev_azim[0], azim=camera_elev_azim[1])

    if save_path:
        try:
            os.makedirs(os.path.dirname(save_path), exist_ok=True)
            plt.savefig(save_path, dpi=100)
            logger.debug(f"Frame saved to {save_path}")
        finally:
            plt.close(fig)
    else:
        plt.show()


def render_day_animation(state: SimulatorState) -> Optional[str]:
    if os.path.exists(ANIMATION_FRAMES_DIR):
        shutil.rmtree(ANIMATION_FRAMES_DIR)
    os.makedirs(ANIMATION_FRAMES_DIR, exist_ok=True)

    frame_filenames: List[str] = []
    for i, hour in enumerate(range(ANIMATION_START_HOUR_UTC, ANIMATION_END_HOUR_UTC + 1)):
        state.set_time(hour, 0)
        frame = state.compose_frame()
        title = (f"{state.geotime.date.isoformat()}  "
                 f"az {frame.sun_angle.azimuth_degrees:.0f} deg, alt {frame.sun_angle.altitude_degrees:.0f} deg")
        logger.info(f"Rendering frame {i + 1}: {title}")
        frame_filename = os.path.join(ANIMATION_FRAMES_DIR, f"frame_{i:04d}.png")
        visualize_frame(state, frame, title, save_path=frame_filename)
        frame_filenames.append(frame_filename)

    if not frame_filenames:
        logger.warning("No frames rendered.")
        return None

    gif_path = os.path.join(SCRIPT_DIR, ANIMATION_OUTPUT_FILENAME)
    with imageio.get_writer(gif_path, mode='I', duration=1.0 / FRAMES_PER_SECOND_GIF, loop=0) as writer:
        for filename in frame_filenames:
            writer.append_data(imageio.imread(filename))
    logger.info(f"Animation saved to {gif_path}")
    return gif_path


if __name__ == "__main__":
    setup_logging(logging.INFO)
    logger.info("--- Running sun shadow preview ---")

    config = load_config(CONFIG_PATH if os.path.exists(CONFIG_PATH) else None)
    state = SimulatorState(config=config, now=lambda: PREVIEW_DATE + timedelta(hours=4))
    build_demo_scene(state)

    frame = state.compose_frame()
    visualize_frame(state, frame, f"Sun shadows at {state.geotime}",
                    save_path=os.path.join(SCRIPT_DIR, "sun_shadow_preview.png"))
    render_day_animation(state)
    logger.info("--- Preview complete ---")
