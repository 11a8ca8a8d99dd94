"""Line-oriented C++ checkers: heuristic style scan and error-code consistency."""
