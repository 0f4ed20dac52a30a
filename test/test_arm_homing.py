# -*- coding: utf-8 -*-

from rover_control.models.actuator import ActuatorChannel, ChannelGroup
from rover_control.models.actuator_state import ActuatorStateStore
from rover_control.safety.arm_homing import (
    ArmHomingPlanner,
    ArmPose,
    HomingConfig,
    HomingPhase,
    joint_step,
    wrist_must_retract_first,
)

BASE = ActuatorChannel.ARM_BASE
SHOULDER = ActuatorChannel.ARM_SHOULDER
ELBOW = ActuatorChannel.ARM_ELBOW
WRIST = ActuatorChannel.ARM_WRIST

CFG = HomingConfig()


def run_until_settled(planner, pose, max_steps=500):
    for _ in range(max_steps):
        step = planner.step(pose)
        pose = step.pose
        if step.phase is HomingPhase.SETTLED:
            return pose
    raise AssertionError(f"homing did not settle from {pose}")


def test_joint_step_magnitudes():
    assert joint_step(BASE, 10, 0, CFG) == -2
    assert joint_step(BASE, 1, 0, CFG) == -1
    assert joint_step(BASE, -1, 0, CFG) == 1
    assert joint_step(WRIST, 0, -40, CFG) == -2
    assert joint_step(SHOULDER, 5, 0, CFG) == -1
    assert joint_step(ELBOW, 0, 30, CFG) == 1


def test_joint_step_never_overshoots():
    assert joint_step(WRIST, -39, -40, CFG) == -1
    assert joint_step(BASE, 0, 0, CFG) == 0


def test_extended_shoulder_retracts_wrist_first():
    planner = ArmHomingPlanner()
    pose = ArmPose(base=10, shoulder=70, elbow=0, wrist=0)
    assert wrist_must_retract_first(pose, CFG)

    step = planner.step(pose)
    assert step.deltas == {BASE: 0, SHOULDER: 0, ELBOW: 0, WRIST: -2}
    assert step.skipped == (BASE, SHOULDER, ELBOW)
    assert step.pose == ArmPose(base=10, shoulder=70, elbow=0, wrist=-2)
    assert pose.wrist == 0


def test_wrist_reaches_retracted_before_other_joints_move():
    planner = ArmHomingPlanner()
    pose = ArmPose(base=10, shoulder=70, elbow=0, wrist=0)
    for _ in range(20):
        pose = planner.step(pose).pose
    assert pose == ArmPose(base=10, shoulder=70, elbow=0, wrist=-40)

    step = planner.step(pose)
    assert step.skipped == ()
    assert step.pose.base == 8
    assert step.pose.shoulder == 69
    assert step.pose.elbow == 1
    assert step.pose.wrist == -40


def test_elbow_target_latched_at_activation():
    planner = ArmHomingPlanner()
    assert planner.elbow_clear_deg is None
    planner.step(ArmPose(base=5, shoulder=0, elbow=10, wrist=0))
    assert planner.elbow_clear_deg == 40
    planner.step(ArmPose(base=3, shoulder=1, elbow=11, wrist=0))
    assert planner.elbow_clear_deg == 40

    planner.deactivate()
    assert planner.elbow_clear_deg is None
    assert planner.phase is HomingPhase.IDLE
    assert planner.steps == 0


def test_base_swing_converges_home():
    planner = ArmHomingPlanner()
    pose = run_until_settled(planner, ArmPose(base=10, shoulder=0, elbow=0, wrist=0))
    assert pose.is_home()


def test_extended_arm_converges_home():
    planner = ArmHomingPlanner()
    pose = run_until_settled(planner, ArmPose(base=-25, shoulder=80, elbow=45, wrist=15))
    assert pose.is_home()


def test_phase_transitions():
    planner = ArmHomingPlanner()
    assert not planner.active
    step = planner.step(ArmPose(base=2))
    assert step.phase is HomingPhase.HOMING
    assert planner.active
    step = planner.step(step.pose)
    assert step.phase is HomingPhase.SETTLED
    assert not step.moved


def test_step_store_writes_back_arm_channels():
    store = ActuatorStateStore()
    store.set(BASE, 10)
    store.clear_dirty(ChannelGroup.ARM)

    ArmHomingPlanner().step_store(store)
    assert store.get(BASE) == 8
    assert store.get(SHOULDER) == 1
    assert store.get(ELBOW) == 1
    assert store.is_dirty(ChannelGroup.ARM)
