from setuptools import setup

setup(
    name='playwright-metrics-push',
    version='1.0.0',
    description='Push Playwright test result metrics to a Prometheus Pushgateway',
    py_modules=[
        'push_config',
        'results_parser',
        'metrics_aggregator',
        'prometheus_format',
        'pushgateway_client',
        'push_metrics_stage',
    ],
    python_requires='>=3.9',
    install_requires=[
        'requests>=2.31.0',
        'PyYAML>=6.0',
        'jsonschema>=4.19.0',
    ],
    extras_require={
        'dev': [
            'pytest>=7.4.0',
            'hypothesis>=6.88.0',
            'mypy>=1.5.0',
            'types-PyYAML>=6.0.0',
            'types-requests>=2.31.0',
        ],
    },
    entry_points={
        'console_scripts': [
            'push-playwright-metrics=push_metrics_stage:main',
        ],
    },
)
