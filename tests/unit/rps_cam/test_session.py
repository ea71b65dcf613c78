"""
Unit tests for the demo session.
"""
from rps_cam.session import DemoSession
from tests.fakes import FakeCamera


class TestDemoSession:

    def test_capture_source_only_when_open(self):
        camera = FakeCamera()
        session = DemoSession(camera=camera)

        assert session.capture_source() is camera
        camera.close()
        assert session.capture_source() is None

    def test_capture_frame(self):
        camera = FakeCamera()
        session = DemoSession(camera=camera)

        frame = session.capture_frame()

        assert frame.shape == camera.frames[0].shape
        assert camera.reads == 1

    def test_capture_frame_without_camera(self):
        assert DemoSession().capture_frame() is None
