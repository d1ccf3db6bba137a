"""Line, VAT and document total calculations."""
