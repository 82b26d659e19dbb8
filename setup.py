#!/usr/bin/env python3
import os

from setuptools import setup


install_requires = [
    'click>=8.0',
    'kubernetes',
    'urllib3'
]

tests_require = [
    'pytest'
]

setup(name='k8s-monitor',
      description='Monitor the CPU and memory usage of a Kubernetes Pod',
      version=os.getenv("K8S_MONITOR_VERSION", "0.dev0"),
      python_requires='>=3.7',
      install_requires=install_requires,
      extras_require={'test': tests_require},
      py_modules=["run"],
      packages=[
          "k8s_monitor",
          "k8s_monitor.config",
          "k8s_monitor.model",
          "k8s_monitor.monitor"],
      entry_points={
          'console_scripts': [
              'k8s-monitor=run:main'
          ]
      })
