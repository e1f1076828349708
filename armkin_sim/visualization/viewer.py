"""
Real-time side-view viewer for an interactive arm session.

Provides a Pygame window that draws the arm, the target marker and the
floor line, overlays the joint values and the target in millimetres, and
acts as the frame-driven host of the session: it calls ``session.tick``
once per display frame so animations advance while the window is open.

Classes:
    ArmViewer: Live side-view rendering and keyboard control.
"""

from __future__ import annotations

import math
import time
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple

from armkin_sim.kinematics.types import Point2, Point3
from armkin_sim.session.arm_3d import Arm3DSession, RobotType
from armkin_sim.session.planar_2r import Planar2RSession
from armkin_sim.utils.constants import (
    COLOR_BACKGROUND,
    COLOR_FLOOR,
    COLOR_JOINT,
    COLOR_LINK,
    COLOR_TARGET,
    COLOR_TEXT,
    DEFAULT_FPS,
)
from armkin_sim.utils.helpers import deg_to_rad, mm_display


@dataclass
class ArmViewer:
    """Pygame-based side view of a 3R, polar or 2R session.

    Spatial arms are drawn in the vertical plane of their current base
    yaw, so the horizontal screen axis is the signed distance along that
    heading.  Key bindings: ``O`` slides the target to its reflection,
    ``J`` drives the joints there, ``T`` toggles 3R/polar, ``Space``
    solves the current target, ``Esc`` quits.

    Attributes:
        width: Window width in pixels.
        height: Window height in pixels.
        fps: Target frames per second.
        scale: Pixels per metre.
        floor_margin: Pixels between the floor line and the window bottom.
        window_title: Caption displayed in the title bar.
    """

    width: int = 640
    height: int = 480
    fps: int = DEFAULT_FPS
    scale: float = 350.0
    floor_margin: int = 60
    window_title: str = "armkin_sim viewer"
    _screen: Optional[Any] = None
    _clock: Optional[Any] = None
    _font: Optional[Any] = None

    # ------------------------------------------------------------------
    # Initialisation / teardown
    # ------------------------------------------------------------------

    def init_display(self) -> None:
        """Create the Pygame window, clock and HUD font.

        Raises:
            ImportError: If Pygame is not installed.
        """
        try:
            import pygame
        except ImportError as exc:
            raise ImportError("Pygame required: pip install pygame") from exc
        pygame.init()
        self._screen = pygame.display.set_mode((self.width, self.height))
        pygame.display.set_caption(self.window_title)
        self._clock = pygame.time.Clock()
        self._font = pygame.font.SysFont("monospace", 14)

    def close(self) -> None:
        """Destroy the Pygame window and quit Pygame."""
        import pygame

        pygame.quit()
        self._screen = None

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------

    def world_to_screen(self, horizontal: float, vertical: float) -> Tuple[int, int]:
        """Map a side-view point (metres, y up) to window pixels (y down).

        Args:
            horizontal: Signed horizontal distance from the base.
            vertical: Height above the floor.

        Returns:
            ``(px, py)`` integer pixel coordinates.
        """
        px = self.width / 2.0 + horizontal * self.scale
        py = self.height - self.floor_margin - vertical * self.scale
        return int(round(px)), int(round(py))

    @staticmethod
    def _side(point: Point3, yaw_rad: float) -> Tuple[float, float]:
        """Project a spatial point onto the vertical plane at *yaw_rad*."""
        along = point.x * math.sin(yaw_rad) + point.z * math.cos(yaw_rad)
        return along, point.y

    def arm_polyline(self, session: Any) -> List[Tuple[int, int]]:
        """Return the screen points base -> (elbow) -> tip of the session's arm."""
        if isinstance(session, Planar2RSession):
            fk = session.forward()
            pts = [Point2(0.0, 0.0), fk.joint, fk.tip]
            return [self.world_to_screen(p.x, p.y) for p in pts]

        yaw = self._yaw(session)
        pts3: List[Point3] = [Point3(0.0, 0.0, 0.0)]
        elbow = session.elbow_position()
        if elbow is not None:
            pts3.append(elbow)
        pts3.append(session.tip_position())
        return [self.world_to_screen(*self._side(p, yaw)) for p in pts3]

    def target_pixel(self, session: Any) -> Tuple[int, int]:
        target = session.target
        if isinstance(target, Point2):
            return self.world_to_screen(target.x, target.y)
        return self.world_to_screen(*self._side(target, self._yaw(session)))

    @staticmethod
    def _yaw(session: Arm3DSession) -> float:
        if session.robot_type is RobotType.THREE_R:
            return deg_to_rad(session.joints.q1)
        return deg_to_rad(session.polar.theta)

    # ------------------------------------------------------------------
    # Drawing
    # ------------------------------------------------------------------

    def _hud_lines(self, session: Any) -> List[str]:
        if isinstance(session, Planar2RSession):
            pose = f"q1={session.joints.q1:6.1f}  q2={session.joints.q2:6.1f}"
            target = f"target x={mm_display(session.target.x)} y={mm_display(session.target.y)} mm"
        elif session.robot_type is RobotType.THREE_R:
            j = session.joints
            pose = f"q1={j.q1:6.1f}  q2={j.q2:6.1f}  q3={j.q3:6.1f}"
            t = session.target
            target = f"target x={mm_display(t.x)} y={mm_display(t.y)} z={mm_display(t.z)} mm"
        else:
            p = session.polar
            pose = f"theta={p.theta:6.1f}  phi={p.phi:5.1f}  rho={mm_display(p.rho)} mm"
            t = session.target
            target = f"target x={mm_display(t.x)} y={mm_display(t.y)} z={mm_display(t.z)} mm"
        status = "animating" if session.is_animating else "idle"
        failure = session.last_failure.value if session.last_failure else "-"
        return [f"arm: {session.arm_type}  [{status}]", pose, target, f"last IK failure: {failure}"]

    def draw(self, session: Any) -> None:
        """Render one frame of *session* into the window."""
        import pygame

        if self._screen is None:
            self.init_display()
        screen = self._screen
        screen.fill(COLOR_BACKGROUND)
        floor_y = self.height - self.floor_margin
        pygame.draw.line(screen, COLOR_FLOOR, (0, floor_y), (self.width, floor_y), 2)

        points = self.arm_polyline(session)
        pygame.draw.lines(screen, COLOR_LINK, False, points, 6)
        for p in points:
            pygame.draw.circle(screen, COLOR_JOINT, p, 7)
        pygame.draw.circle(screen, COLOR_TARGET, self.target_pixel(session), 9, 2)

        for i, line in enumerate(self._hud_lines(session)):
            screen.blit(self._font.render(line, True, COLOR_TEXT), (8, 4 + 18 * i))

    # ------------------------------------------------------------------
    # Event loop
    # ------------------------------------------------------------------

    def _handle_key(self, key: int, session: Any, pygame_module: Any) -> bool:
        """Dispatch one key press; returns False when the viewer should quit."""
        pg = pygame_module
        now = time.perf_counter()
        if key == pg.K_ESCAPE:
            return False
        if key == pg.K_o:
            session.animate_target_to_opposite(now)
        elif key == pg.K_j:
            session.animate_joints_to_opposite(now)
        elif key == pg.K_t and isinstance(session, Arm3DSession):
            session.toggle_robot_type()
        elif key == pg.K_SPACE:
            if isinstance(session, Planar2RSession):
                session.go_to_target()
            else:
                session.solve_ik()
        return True

    def _pump_events(self, session: Any) -> bool:
        import pygame

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return False
            if event.type == pygame.KEYDOWN and not self._handle_key(event.key, session, pygame):
                return False
        return True

    def run(self, session: Any, max_frames: Optional[int] = None) -> None:
        """Show *session* until the window is closed.

        Each frame pumps input, advances the session's animation, draws
        and flips.  The running animation is cancelled on exit.

        Args:
            session: An ``Arm3DSession`` or ``Planar2RSession``.
            max_frames: Stop after this many frames (``None`` runs forever).
        """
        import pygame

        if self._screen is None:
            self.init_display()
        frame = 0
        try:
            while max_frames is None or frame < max_frames:
                if not self._pump_events(session):
                    break
                session.tick(time.perf_counter())
                self.draw(session)
                pygame.display.flip()
                self._clock.tick(self.fps)
                frame += 1
        finally:
            session.close()
            self.close()
