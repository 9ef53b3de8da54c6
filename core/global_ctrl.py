from PyQt5.QtCore import QObject, pyqtSignal


class GlobalController(QObject):
    """
    Holds global playback settings shared by every structure: the speed
    multiplier that scales each wait and fade, and the auto-centering flag.
    When a QSettings instance is given both values survive restarts.
    """

    speedChanged = pyqtSignal(float)
    centeringChanged = pyqtSignal(bool)

    SPEED_KEY = "animationSpeed"
    CENTERING_KEY = "centeringEnable"

    def __init__(self, settings=None):
        super().__init__()
        self._speed = 1.0  # multiplier: 1.0× by default
        self._centering = True
        self._settings = settings
        if settings is not None:
            self._load()

    @property
    def speed(self) -> float:
        return self._speed

    @property
    def centering_enabled(self) -> bool:
        return self._centering

    def set_speed(self, value: float):
        """Clamp and broadcast speed multiplier (0.5× – 3×)."""
        value = max(0.5, min(3.0, value))
        if abs(value - self._speed) > 1e-3:
            self._speed = value
            self._store(self.SPEED_KEY, value)
            self.speedChanged.emit(self._speed)

    def set_centering(self, enabled: bool):
        enabled = bool(enabled)
        if enabled != self._centering:
            self._centering = enabled
            self._store(self.CENTERING_KEY, enabled)
            self.centeringChanged.emit(enabled)

    def scale_duration(self, base_ms) -> int:
        """
        Convert a base duration (ms) into the actual playback duration,
        treating the slider value as 'speed multiplier'. Higher speed → shorter duration.
        """
        if self._speed <= 0:
            return int(base_ms)
        return max(1, int(base_ms / self._speed))

    def _load(self):
        speed = self._settings.value(self.SPEED_KEY, 1.0, type=float)
        self._speed = max(0.5, min(3.0, speed))
        self._centering = self._settings.value(self.CENTERING_KEY, True, type=bool)

    def _store(self, key, value):
        if self._settings is not None:
            self._settings.setValue(key, value)
