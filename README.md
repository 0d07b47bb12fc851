# robogenius

Building blocks for the control software of a small mobile robot:

- `robogenius.params`: the robot's tuning constants and the structures behind them (`Pose`, `PIDParams`, `PIDCtrlParams`, `SensorCalibError`, `SysParams`, ...). `params_init()` returns a `SysParams` filled with the defaults. `vision_cal_init()` returns the camera-to-floor calibration points.
- `robogenius.pid`: a discrete `PID` controller and `PidFilter`, a moving average over the last N samples.
- `robogenius.command`: the `Command` base class and its life-cycle `State`.
- `robogenius.scheduler`: `Scheduler`, which steps commands through their states with `handle_command`. It can use worker threads.
- `robogenius.timer`: `Timer` and `TimerManager` for one-shot and recurring timers that carry commands.
- `robogenius.config`: `Config`, a registry of typed `ConfigVar` values. Values load from parsed YAML or from a directory of `.yml` files. Listeners are notified on change.
- `robogenius.util`: clock helpers (`get_current_ms`, `get_current_us`, `get_thread_id`) and file-system helpers (`list_all_file`, `mkdir`, `rm`, `mv`, `symlink`, `realpath`, `dirname`, `basename`, `open_for_read`, `open_for_write`, `is_running_pid_file`).
- `robogenius.logsetup`: `init()` logs to stderr and to INFO/WARNING/ERROR files in a directory. `shutdown()` removes those handlers again.
- `robogenius.vision`: detection boxes (`BoxInfo`, `MatInfo`). It also has non-maximum suppression (`nms`), box captions (`box_label`) and mapping of boxes back to source-image pixels (`box_to_image_rect`).

## Installation

```
pip install .
```

With the test dependencies:

```
pip install ".[test]"
```

## PID control

```python
from robogenius.pid import PID

pid = PID(0.02)
pid.set_gains(0.2, 0.005, 0)
pid.set_output_limits(-100, 100)
pid.set_point(50)
pid.set_process(10)
pid.calculate()
print(pid.output)
```

If the gains change between two calls to `calculate()`, the controller holds its previous output for that cycle.

## Smoothing a sensor reading

```python
from robogenius.pid import PidFilter

smooth = PidFilter(5)
for reading in (10.0, 12.0, 11.0):
    print(smooth.filter(reading))
```

## Configuration

```python
from robogenius.config import Config

speed = Config.lookup("chassis.speed", 20, "default chassis speed")
Config.load_from_yaml({"chassis": {"speed": 35}})
print(speed.value)  # 35
```

Variable names may contain only the characters `a`–`z`, `0`–`8`, `.` and `_`. Any other name makes `lookup` raise `ValueError`. If a name is already registered with a different type, `lookup` returns `None`. `Config.reset()` clears the registry.

## Scheduling commands

```python
from robogenius.command import Command
from robogenius.scheduler import Scheduler


class CountTo(Command):
    def __init__(self, n):
        super().__init__()
        self.n = n
        self.count = 0

    def execute(self):
        self.count += 1

    def is_finished(self):
        return self.count >= self.n


scheduler = Scheduler(1, True, "main")
scheduler.start()
task = CountTo(3)
scheduler.schedule(task)
scheduler.stop()   # runs on the calling thread until no work is left
print(task.count)  # 3
```

The scheduler accepts commands only after `start()` has been called. A command can be queued only once at a time.

## What this package does not do

This package does not drive hardware. It has no motor, encoder, servo, lidar, infrared or ultrasound drivers, and no ready-made robot behaviours or command groups. It has no camera capture and does not run neural networks; `robogenius.vision` only processes boxes that some other code has produced. It provides no command-line program.

## Running the tests

```
pytest
```