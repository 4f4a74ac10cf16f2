"""
explore.launch.py

Starts the singleton explore node for all robots. Per-robot frontier
detectors and Nav2 stacks are launched elsewhere.
"""

import os

from ament_index_python.packages import get_package_share_directory
from launch import LaunchDescription
from launch.actions import DeclareLaunchArgument
from launch.substitutions import LaunchConfiguration
from launch_ros.actions import Node


def generate_launch_description():
    default_params = os.path.join(
        get_package_share_directory('explore_coordinator'),
        'params', 'explore_params.yaml')

    params_file = LaunchConfiguration('params_file')
    log_level   = LaunchConfiguration('log_level')

    return LaunchDescription([
        DeclareLaunchArgument(
            'params_file',
            default_value=default_params,
            description='YAML with robot_namespaces, exploration_boundary, ...'),
        DeclareLaunchArgument(
            'log_level',
            default_value='info',
            description='debug prints every ranked frontier'),

        Node(
            package='explore_coordinator',
            executable='explore',
            name='explore',
            parameters=[params_file],
            arguments=['--ros-args', '--log-level', log_level],
            output='screen',
        ),
    ])
