from setuptools import setup

package_name = 'explore_coordinator'

setup(
    name=package_name,
    version='0.1.0',
    packages=[package_name],
    data_files=[
        ('share/ament_index/resource_index/packages',
         ['resource/' + package_name]),
        ('share/' + package_name, ['package.xml']),
        ('share/' + package_name + '/launch', ['launch/explore.launch.py']),
        ('share/' + package_name + '/params', ['params/explore_params.yaml']),
    ],
    install_requires=['setuptools', 'numpy', 'opencv-python'],
    extras_require={'test': ['pytest']},
    zip_safe=True,
    maintainer='telemaque',
    maintainer_email='telemaque@example.com',
    description='Multi-robot frontier goal assignment with stall and failure blacklisting.',
    license='MIT',
    tests_require=['pytest'],
    entry_points={
        'console_scripts': [
            'explore = explore_coordinator.explore_node:main',
        ],
    },
)
