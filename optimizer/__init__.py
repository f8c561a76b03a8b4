"""
Upload image optimizer.

Shrinks oversized photos to fit the upload byte budget before they are
sent to the image CDN. See ImageProcessor for the pipeline.
"""
