from PyQt5.QtCore import QEasingCurve, QPropertyAnimation, QVariantAnimation


class AnimationToolkit:
    """Builds the Qt animations used by the scene; view transitions follow the speed setting."""

    def __init__(self, global_ctrl):
        self.global_ctrl = global_ctrl

    def _scaled(self, anim, duration):
        anim.setDuration(self.global_ctrl.scale_duration(duration))
        return anim

    def opacity(self, item, start, end, duration=400):
        """Opacity animation of a QGraphicsObject; ``duration`` is used as given."""
        anim = QPropertyAnimation(item, b"opacity")
        anim.setDuration(int(duration))
        anim.setStartValue(float(start))
        anim.setEndValue(float(end))
        anim.setEasingCurve(QEasingCurve.InOutQuad)
        return anim

    def progress(self, duration=360, parent=None):
        """0.0 -> 1.0 driver for hand-written interpolations (view transitions)."""
        anim = QVariantAnimation(parent)
        anim.setStartValue(0.0)
        anim.setEndValue(1.0)
        anim.setEasingCurve(QEasingCurve.InOutCubic)
        return self._scaled(anim, duration)
