"""Complementary orientation filters for inertial sensors.

This package estimates the 3D orientation of a rigid body, as a unit
quaternion, from gyroscope, accelerometer and magnetometer streams:
- filters: Mahony (PI feedback) and Madgwick (gradient descent) filters
- coords: Quaternion algebra and rotation conversions
- sensors: Sensor sample and telemetry series containers
- io: Semicolon-delimited telemetry tables
- eval: Quaternion error metrics, timing harness and plots
- sim: Synthetic sensor traces from a known orientation trajectory
- config: Validated filter configuration and presets
"""

__version__ = "0.1.0"
