"""Robot geometry, servo calibration, controller gains and the parameter set."""

from __future__ import annotations

from dataclasses import dataclass, field

Point = tuple[float, float]


@dataclass(frozen=True)
class PIDParams:
    """Proportional, integral and derivative gains."""

    kp: float = 0.0
    ki: float = 0.0
    kd: float = 0.0


@dataclass(frozen=True)
class PIDOutputLimits:
    """Lower and upper bound of a controller output."""

    min: float = 0.0
    max: float = 0.0


@dataclass(frozen=True)
class PIDCtrlParams:
    """Gains, output limits and control period of one PID loop."""

    pid: PIDParams = field(default_factory=PIDParams)
    limit: PIDOutputLimits = field(default_factory=PIDOutputLimits)
    dt: float = 0.0


@dataclass(frozen=True)
class PIDErrorParams:
    """Error band and the number of samples that must fall within it."""

    e_range: float = 0.0
    cnt: int = 0


@dataclass
class Pose:
    """Planar position and heading."""

    x: float = 0.0
    y: float = 0.0
    theta: float = 0.0


@dataclass
class CarCtrlVal:
    """Linear and angular velocity command."""

    v: float = 0.0
    w: float = 0.0


@dataclass(frozen=True)
class CtrlPID:
    """Gains with a single symmetric output limit."""

    p: float = 0.0
    i: float = 0.0
    d: float = 0.0
    limit: float = 0.0


@dataclass
class ControlError:
    """Current, last and previous error of an incremental controller."""

    current: float = 0.0
    last: float = 0.0
    previous: float = 0.0


@dataclass
class LidarData:
    """One lidar sample: range in metres, angle in radians, intensity."""

    range: float = 0.0
    angle: float = 0.0
    intensity: float = 0.0


@dataclass
class Polar:
    """Polar coordinate with the angle in degrees."""

    range: float = 0.0
    angle: float = 0.0


@dataclass
class SensorCalibError:
    """Tolerances for a two-sensor distance/angle calibration."""

    angle: float = 0.0
    dis: float = 0.0
    cnt: int = 0
    left_right_e: float = 0.0


@dataclass
class LidarCalibError:
    """Tolerances for lidar calibration."""

    angle: PIDErrorParams = field(default_factory=PIDErrorParams)
    dis: PIDErrorParams = field(default_factory=PIDErrorParams)
    left_right_e: float = 0.0


def _zero_quad() -> tuple[Point, Point, Point, Point]:
    return ((0.0, 0.0), (0.0, 0.0), (0.0, 0.0), (0.0, 0.0))


@dataclass
class CalImg:
    """Four image points and the four floor points they correspond to."""

    image: tuple[Point, Point, Point, Point] = field(default_factory=_zero_quad)
    object: tuple[Point, Point, Point, Point] = field(default_factory=_zero_quad)


@dataclass
class LidarInitParams:
    """Mounting angle of the lidar and its calibration sampling half-range."""

    init_angle: float = 0.0
    cal_angle: float = 0.0


# Robot geometry
ACCURACY_K = 95.1 / 98.2
WHEEL_DIAMETER = 12.5 * ACCURACY_K
CAR_WIDTH = 32.5
GRATING_NUM = 1440.0
MOTOR_CTRL_PERIOD = 20.0
ODOM_PERIOD = 20.0

# Lidar
LIDAR_INIT_ANGLE = -91
LIDAR_CALIB_ANGLE = 10.0
LIDAR_CALIB_PID = CtrlPID(0.5, 0.3, 0, 10)

# Servo duty-cycle range
CLAMP_SERVO_MIN = 0.05
CLAMP_SERVO_MAX = 0.255
RAISE_SERVO_MIN = 0.05
RAISE_SERVO_MAX = 0.19
TELESCOPIC_SERVO_MIN = 0.095
TELESCOPIC_SERVO_MAX = 0.25
ROTATING_SERVO_MIN = 0.24
ROTATING_SERVO_MAX = 0.11

# Servo mounting defaults
CLAMP_SERVO_DEFAULT = 0.10
TELESCOPIC_SERVO_DEFAULT = 0.10
RAISE_SERVO_DEFAULT = 0.05
ROTATING_SERVO_DEFAULT = 0.18

# Servo calibration: duty = A * value + B
CLAMP_LEN_MIN = 1.3
CLAMP_LEN_MAX = 24.2
CLAMP_LEN_A = (CLAMP_SERVO_MAX - CLAMP_SERVO_MIN) / (CLAMP_LEN_MAX - CLAMP_LEN_MIN)
CLAMP_LEN_B = (CLAMP_LEN_MAX * CLAMP_SERVO_MIN - CLAMP_LEN_MIN * CLAMP_SERVO_MAX) / (
    CLAMP_LEN_MAX - CLAMP_LEN_MIN
)

RAISE_ANGLE_MIN = 0.0
RAISE_ANGLE_MAX = 90.0
RAISE_ANGLE_A = (RAISE_SERVO_MAX - RAISE_SERVO_MIN) / (RAISE_ANGLE_MAX - RAISE_ANGLE_MIN)
RAISE_ANGLE_B = (RAISE_ANGLE_MAX * RAISE_SERVO_MIN - RAISE_ANGLE_MIN * RAISE_SERVO_MAX) / (
    RAISE_ANGLE_MAX - RAISE_ANGLE_MIN
)

TELESCOPIC_DIS_MIN = -3.3
TELESCOPIC_DIS_MAX = 9
TELESCOPIC_DIS_A = (TELESCOPIC_SERVO_MAX - TELESCOPIC_SERVO_MIN) / (
    TELESCOPIC_DIS_MAX - TELESCOPIC_DIS_MIN
)
TELESCOPIC_DIS_B = (
    TELESCOPIC_DIS_MAX * TELESCOPIC_SERVO_MIN - TELESCOPIC_DIS_MIN * TELESCOPIC_SERVO_MAX
) / (TELESCOPIC_DIS_MAX - TELESCOPIC_DIS_MIN)

ROTATING_ANGLE_MIN = -90.0
ROTATING_ANGLE_MAX = 90.0
ROTATING_ANGLE_A = (ROTATING_SERVO_MAX - ROTATING_SERVO_MIN) / (
    ROTATING_ANGLE_MAX - ROTATING_ANGLE_MIN
)
ROTATING_ANGLE_B = (
    ROTATING_ANGLE_MAX * ROTATING_SERVO_MIN - ROTATING_ANGLE_MIN * ROTATING_SERVO_MAX
) / (ROTATING_ANGLE_MAX - ROTATING_ANGLE_MIN)

# Fruit
APPLE_LABEL = 0
APPLE_SIZE = 10

# Motor speed loops
LEFT_MOTOR_PID = PIDParams(0.2, 0.005, 0)
RIGHT_MOTOR_PID = PIDParams(0.2, 0.005, 0)
TURN_MOTOR_PID = PIDParams(0.2, 0.005, 0)
LIFT_MOTOR_PID = PIDParams(0.2, 0.005, 0)
LEFT_MOTOR_OUTPUT_LIMITS = PIDOutputLimits(-100, 100)
RIGHT_MOTOR_OUTPUT_LIMITS = PIDOutputLimits(-100, 100)
TURN_MOTOR_OUTPUT_LIMITS = PIDOutputLimits(-100, 100)
LIFT_MOTOR_OUTPUT_LIMITS = PIDOutputLimits(-100, 100)

# Motor position loops
LIFT_MOTOR_DISTANCE_PID_PARAMS = PIDParams(0.05, 0.0, 0.01)
TURN_MOTOR_DISTANCE_PID_PARAMS = PIDParams(0.05, 0.0, 0.01)
LIFT_MOTOR_DISTANCE_LIMITS = PIDOutputLimits(-30, 30)
TURN_MOTOR_DISTANCE_LIMITS = PIDOutputLimits(-30, 30)
LIFT_MOTOR_DISTANCE_ERROR = 10
LIFT_MOTOR_DISTANCE_COUNTER = 5
TURN_MOTOR_DISTANCE_ERROR = 10
TURN_MOTOR_DISTANCE_COUNTER = 5

# Infrared calibration
IR_DISTANCE_PID = PIDParams(1.5, 0.0, 0)
IR_ANGLE_PID = PIDParams(0.5, 0.0, 0.0)
IR_DISTANCE_OUTPUT_LIMITS = PIDOutputLimits(-20, 20)
IR_ANGLE_OUTPUT_LIMITS = PIDOutputLimits(-10, 10)

# Single infrared calibration
SINGLE_IR_DISTANCE_PID = PIDParams(1.5, 0.0, 0)
SINGLE_IR_ANGLE_PID = PIDParams(1.0, 0.0, 0.0)
SINGLE_IR_DISTANCE_OUTPUT_LIMITS = PIDOutputLimits(-20, 20)
SINGLE_IR_ANGLE_OUTPUT_LIMITS = PIDOutputLimits(-10, 10)

# Ultrasound calibration
US_DISTANCE_PID = PIDParams(1.5, 0.0, 0)
US_ANGLE_PID = PIDParams(0.5, 0.0, 0.0)
US_DISTANCE_OUTPUT_LIMITS = PIDOutputLimits(-20, 20)
US_ANGLE_OUTPUT_LIMITS = PIDOutputLimits(-10, 10)

# Lidar calibration
LIDAR_ANGLE_PID = PIDParams(1.5, 0.0, 0.1)
LIDAR_DISTANCE_PID = PIDParams(1.5, 0.0, 0.1)
LIDAR_ANGLE_PID_OUTPUT_LIMITS = PIDOutputLimits(-10, 10)
LIDAR_DISTANCE_PID_OUTPUT_LIMITS = PIDOutputLimits(-20, 20)
LIDAR_ANGLE_PID_E_MAX = 0.5
LIDAR_ANGLE_CNT_MIN = 5
LIDAR_DISTANCE_CNT_MIN = 5
LIDAR_ANGLE_E_MAX = 0.3
LIDAR_DISTANCE_E_MAX = 0.5

# Lidar wall following
ALONG_WALL_PID = PIDParams(1, 0.0, 0.1)
ALONG_WALL_PID_LIMITS = PIDOutputLimits(-5, 5)

# Coordinate motion
VX_PID = CtrlPID(2.5, 1.5, 0, 60)
VY_PID = CtrlPID(2.5, 3.5, 0, 40)
VZ_PID = CtrlPID(1.0, 4.0, 0, 180)

V_MAX = 100.0
W_MAX = 360.0
V_MIN = 0.5
W_MIN = 0.5
V_INC_MAX = 30.0
W_INC_MAX = 60.0

PID_DT = 0.02
CTRL_DT = 0.1


@dataclass
class SysParams:
    """Every tunable controller and calibration setting of the robot."""

    left_motor_pid: PIDCtrlParams = field(default_factory=PIDCtrlParams)
    right_motor_pid: PIDCtrlParams = field(default_factory=PIDCtrlParams)
    turn_motor_pid: PIDCtrlParams = field(default_factory=PIDCtrlParams)
    lift_motor_pid: PIDCtrlParams = field(default_factory=PIDCtrlParams)
    turn_distance_pid: PIDCtrlParams = field(default_factory=PIDCtrlParams)
    lift_distance_pid: PIDCtrlParams = field(default_factory=PIDCtrlParams)
    ir_cal_angle_pid: PIDCtrlParams = field(default_factory=PIDCtrlParams)
    ir_cal_distance_pid: PIDCtrlParams = field(default_factory=PIDCtrlParams)
    single_ir_cal_angle_pid: PIDCtrlParams = field(default_factory=PIDCtrlParams)
    single_ir_cal_distance_pid: PIDCtrlParams = field(default_factory=PIDCtrlParams)
    us_cal_angle_pid: PIDCtrlParams = field(default_factory=PIDCtrlParams)
    us_cal_distance_pid: PIDCtrlParams = field(default_factory=PIDCtrlParams)
    lidar_cal_angle_pid: PIDCtrlParams = field(default_factory=PIDCtrlParams)
    lidar_cal_distance_pid: PIDCtrlParams = field(default_factory=PIDCtrlParams)
    along_wall_pid: PIDCtrlParams = field(default_factory=PIDCtrlParams)
    vx_pid: CtrlPID = field(default_factory=CtrlPID)
    vy_pid: CtrlPID = field(default_factory=CtrlPID)
    vz_pid: CtrlPID = field(default_factory=CtrlPID)
    lidar_calib_error: LidarCalibError = field(default_factory=LidarCalibError)
    ir_calib_error: SensorCalibError = field(default_factory=SensorCalibError)
    us_calib_error: SensorCalibError = field(default_factory=SensorCalibError)
    single_ir_calib_error: SensorCalibError = field(default_factory=SensorCalibError)
    img_cal_data: CalImg = field(default_factory=CalImg)
    lidar_params: LidarInitParams = field(default_factory=LidarInitParams)


def vision_cal_init() -> CalImg:
    """Return the camera-to-floor calibration points."""
    return CalImg(
        image=((83, 125), (249, 127), (260, 228), (68, 229)),
        object=((5.0, 14.0), (-5.0, 14.0), (-10.0, 0.0), (10.0, 0.0)),
    )


def params_init() -> SysParams:
    """Return the parameter set populated with the robot's defaults."""
    return SysParams(
        left_motor_pid=PIDCtrlParams(LEFT_MOTOR_PID, LEFT_MOTOR_OUTPUT_LIMITS, PID_DT),
        right_motor_pid=PIDCtrlParams(RIGHT_MOTOR_PID, RIGHT_MOTOR_OUTPUT_LIMITS, PID_DT),
        turn_motor_pid=PIDCtrlParams(TURN_MOTOR_PID, TURN_MOTOR_OUTPUT_LIMITS, PID_DT),
        lift_motor_pid=PIDCtrlParams(LIFT_MOTOR_PID, LIFT_MOTOR_OUTPUT_LIMITS, PID_DT),
        turn_distance_pid=PIDCtrlParams(
            TURN_MOTOR_DISTANCE_PID_PARAMS, TURN_MOTOR_DISTANCE_LIMITS, PID_DT
        ),
        lift_distance_pid=PIDCtrlParams(
            LIFT_MOTOR_DISTANCE_PID_PARAMS, LIFT_MOTOR_DISTANCE_LIMITS, PID_DT
        ),
        ir_cal_angle_pid=PIDCtrlParams(IR_ANGLE_PID, IR_ANGLE_OUTPUT_LIMITS, PID_DT),
        ir_cal_distance_pid=PIDCtrlParams(IR_DISTANCE_PID, IR_DISTANCE_OUTPUT_LIMITS, PID_DT),
        single_ir_cal_angle_pid=PIDCtrlParams(
            SINGLE_IR_ANGLE_PID, SINGLE_IR_ANGLE_OUTPUT_LIMITS, PID_DT
        ),
        single_ir_cal_distance_pid=PIDCtrlParams(
            SINGLE_IR_DISTANCE_PID, SINGLE_IR_DISTANCE_OUTPUT_LIMITS, PID_DT
        ),
        us_cal_angle_pid=PIDCtrlParams(US_ANGLE_PID, US_ANGLE_OUTPUT_LIMITS, PID_DT),
        us_cal_distance_pid=PIDCtrlParams(US_DISTANCE_PID, US_DISTANCE_OUTPUT_LIMITS, PID_DT),
        lidar_cal_angle_pid=PIDCtrlParams(
            LIDAR_ANGLE_PID, LIDAR_ANGLE_PID_OUTPUT_LIMITS, CTRL_DT
        ),
        lidar_cal_distance_pid=PIDCtrlParams(
            LIDAR_DISTANCE_PID, LIDAR_DISTANCE_PID_OUTPUT_LIMITS, CTRL_DT
        ),
        along_wall_pid=PIDCtrlParams(ALONG_WALL_PID, ALONG_WALL_PID_LIMITS, CTRL_DT),
        vx_pid=VX_PID,
        vy_pid=VY_PID,
        vz_pid=VZ_PID,
        lidar_calib_error=LidarCalibError(
            angle=PIDErrorParams(LIDAR_ANGLE_E_MAX, LIDAR_ANGLE_CNT_MIN),
            dis=PIDErrorParams(LIDAR_DISTANCE_E_MAX, LIDAR_DISTANCE_CNT_MIN),
            left_right_e=LIDAR_ANGLE_PID_E_MAX,
        ),
        ir_calib_error=SensorCalibError(angle=0.5, dis=0.5, cnt=3, left_right_e=2),
        us_calib_error=SensorCalibError(angle=0.5, dis=0.5, cnt=3, left_right_e=2),
        single_ir_calib_error=SensorCalibError(angle=0.5, dis=0.5, cnt=3, left_right_e=1),
        img_cal_data=vision_cal_init(),
        lidar_params=LidarInitParams(init_angle=LIDAR_INIT_ANGLE, cal_angle=LIDAR_CALIB_ANGLE),
    )