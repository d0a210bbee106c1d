"""
Core component tests for Sample Grid:
- Scalar Kalman estimator
- Bit-packed grids
- Gaussian smoothing
- SampleGrid lifecycle, sampling and measurement
"""
