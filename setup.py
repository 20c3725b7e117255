from setuptools import find_packages, setup

package_name = 'spline_tracker'

setup(
    name=package_name,
    version='0.1.0',
    packages=find_packages(exclude=['test', 'test.*']),
    package_data={
        package_name: ['config/*.yaml'],
    },
    install_requires=[
        'setuptools',
        'numpy',
        'scipy',
        'pyyaml',
    ],
    python_requires='>=3.10',
    zip_safe=True,
    maintainer='hansoo',
    maintainer_email='hansoo@todo.todo',
    description='Parametric spline path and trajectory tracking error model',
    license='Apache-2.0',
    extras_require={
        'test': [
            'pytest',
        ],
    },
)
