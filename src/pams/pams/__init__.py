"""Personnel & Attendance Management Suite: scoring and anomaly engine.

The package is organized by feature modules (geo, attendance, leaves, tasks,
performance, anomalies) with a thin Flask controller layer on top of
service/repository layers.
"""
