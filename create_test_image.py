#!/usr/bin/env python3
"""
Create a sample image with known colors for trying out the palette extractor.

The image has a white border, a black band and a transparent corner, all of
which the sampler filters out, so only the colored regions reach the palette.
"""

import numpy as np
import cv2

# RGBA canvas with a near-white background
test_image = np.full((300, 400, 4), [250, 250, 250, 255], dtype=np.uint8)

# Colored regions
test_image[20:100, 20:130] = [230, 57, 70, 255]     # Red
test_image[20:100, 145:255] = [241, 162, 8, 255]    # Orange
test_image[20:100, 270:380] = [42, 157, 143, 255]   # Teal
test_image[115:195, 20:130] = [38, 70, 83, 255]     # Slate
test_image[115:195, 145:255] = [131, 56, 236, 255]  # Violet
test_image[115:195, 270:380] = [58, 134, 255, 255]  # Blue

# Filtered regions: shadow band and a transparent corner
test_image[210:250, 20:380] = [5, 5, 5, 255]
test_image[260:300, 300:400] = [200, 30, 30, 0]

# Save as PNG to keep the alpha channel (OpenCV expects BGRA)
cv2.imwrite('test_image.png', test_image[:, :, [2, 1, 0, 3]])
print("Test image 'test_image.png' created successfully!")
