"""Positional PID controller and a moving-average filter."""

from __future__ import annotations

from collections import deque


class PID:
    """PID controller with integral time and derivative-on-measurement.

    ``ki`` and ``kd`` act as integral and derivative times scaled by ``kp``.
    When the gains change between two calls to :meth:`calculate`, the
    previous output is held for that cycle.
    """

    def __init__(self, dt_s: float) -> None:
        if not dt_s > 0:
            raise ValueError("dt_s must be positive")
        self._dt_s = dt_s
        self.output = 0.0
        self.max_output = 0.0
        self.min_output = 0.0
        self.setpoint = 0.0
        self.process = 0.0
        self._kp = self._ki = self._kd = 0.0
        self._kp_last = self._ki_last = self._kd_last = 0.0
        self._integral_err = 0.0
        self._integral_output = 0.0
        self._diff_output = 0.0
        self._error = 0.0
        self._last_process = 0.0
        self._last_output = 0.0
        self._first = True

    def set_gains(self, kp: float, ki: float, kd: float) -> None:
        self._kp, self._ki, self._kd = kp, ki, kd

    def set_output_limits(self, min_output: float, max_output: float) -> None:
        self.min_output = min_output
        self.max_output = max_output

    def set_point(self, setpoint: float) -> None:
        self.setpoint = setpoint

    def set_process(self, process: float) -> None:
        self.process = process

    def _gains_unchanged(self) -> bool:
        return (
            self._kp == self._kp_last
            and self._ki == self._ki_last
            and self._kd == self._kd_last
        )

    def _remember_gains(self) -> None:
        self._kp_last, self._ki_last, self._kd_last = self._kp, self._ki, self._kd

    def calculate(self) -> None:
        """Update :attr:`output` from the current setpoint and process value."""
        self._error = self.setpoint - self.process

        if not self._gains_unchanged() and not self._first:
            self.output = self._last_output
            self._remember_gains()
            return

        self._diff_calculate()
        self._integral_calculate()

        output = self._kp * self._error + self._integral_output + self._diff_output
        if output > self.max_output:
            output = self.max_output
        if output < self.min_output:
            output = self.min_output
        self.output = output

        self._last_process = self.process
        self._remember_gains()
        self._last_output = self.output
        self._first = False

    def _diff_calculate(self) -> None:
        if self._first:
            self._diff_output = 0.0
            self._last_process = self.process
            return
        self._diff_output = (
            (self._last_process - self.process) * self._kd * self._kp / self._dt_s
        )

    def _integral_calculate(self) -> None:
        """Integrate the error, bounded by the output limits."""
        if self._ki == 0:
            self._integral_output = 0.0
            return
        self._integral_output = (
            (self._integral_err + self._error) * self._kp * self._dt_s / self._ki
        )
        if self._integral_output > self.max_output:
            self._integral_output = self.max_output
        elif self._integral_output < self.min_output:
            self._integral_output = self.min_output
        else:
            self._integral_err += self._error

    def get_output_int(self) -> int:
        return int(self.output)

    def get_p(self) -> float:
        return self._kp * self._error

    def get_i(self) -> float:
        return self._integral_output

    def get_d(self) -> float:
        return self._diff_output

    def reset(self) -> None:
        """Clear the controller state; gains and limits are kept."""
        self.process = 0.0
        self.setpoint = 0.0
        self.output = 0.0
        self._error = 0.0
        self._integral_err = 0.0
        self._diff_output = 0.0
        self._integral_output = 0.0
        self._last_process = 0.0
        self._first = True


class PidFilter:
    """Moving average over the last ``max_size`` samples."""

    def __init__(self, max_size: int = 5) -> None:
        if max_size <= 0:
            raise ValueError("max_size must be positive")
        self._window: deque[float] = deque(maxlen=max_size)

    def filter(self, value: float) -> float:
        """Add a sample and return the mean of the current window."""
        self._window.append(value)
        return sum(self._window) / len(self._window)