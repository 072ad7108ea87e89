"""Ray tracing building blocks: scene parsing, intersection, kd-trees and Phong shading."""

__version__ = "0.1.0"