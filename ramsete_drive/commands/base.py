"""命令基类"""
from typing import Iterable, FrozenSet, Optional, Sequence, Tuple

from ..core.interfaces import ICommand, IDrivetrain


class Command(ICommand):
    """
    命令基类

    为四个生命周期钩子提供空实现，子类按需覆盖。

    Attributes:
        name: 日志中使用的命令名
    """

    def __init__(self, requirements: Iterable[object] = (), name: Optional[str] = None):
        self._requirements: FrozenSet[object] = frozenset(requirements)
        self.name = name or type(self).__name__

    @property
    def requirements(self) -> FrozenSet[object]:
        return self._requirements

    def initialize(self) -> None:
        pass

    def execute(self) -> None:
        pass

    def is_finished(self) -> bool:
        return False

    def end(self, interrupted: bool) -> None:
        pass

    def __repr__(self) -> str:
        return f"{self.name}()"


class DrivetrainCommand(Command):
    """
    独占底盘的命令

    提供每次运行最多一次的停止命令: _stop_once() 在一次 initialize() 到下一次
    initialize() 之间只会下发一次零电压。
    """

    def __init__(self, drivetrain: IDrivetrain, name: Optional[str] = None):
        super().__init__(requirements=(drivetrain,), name=name)
        self.drivetrain = drivetrain
        self._stop_count = 0

    @property
    def stop_count(self) -> int:
        """本次运行中下发停止命令的次数 (0 或 1)"""
        return self._stop_count

    def _begin_run(self) -> None:
        self._stop_count = 0

    def _stop_once(self) -> bool:
        if self._stop_count > 0:
            return False
        self.drivetrain.tank_drive_volts(0.0, 0.0)
        self._stop_count += 1
        return True


class SequentialCommand(Command):
    """
    顺序命令组

    依次运行子命令: 当前子命令结束后在同一个周期内初始化下一个。
    requirements 为所有子命令 requirements 的并集。
    被打断时只结束当前子命令，后续子命令不再运行。
    """

    def __init__(self, commands: Sequence[ICommand], name: Optional[str] = None):
        requirements = set()
        for command in commands:
            requirements.update(command.requirements)
        super().__init__(requirements=requirements, name=name)
        self.commands: Tuple[ICommand, ...] = tuple(commands)
        self._index = -1

    @property
    def current(self) -> Optional[ICommand]:
        """当前运行的子命令，未开始或已结束时为 None"""
        if 0 <= self._index < len(self.commands):
            return self.commands[self._index]
        return None

    def initialize(self) -> None:
        self._index = 0
        if self.commands:
            self.commands[0].initialize()

    def execute(self) -> None:
        command = self.current
        if command is None:
            return
        command.execute()
        if command.is_finished():
            command.end(False)
            self._index += 1
            if self._index < len(self.commands):
                self.commands[self._index].initialize()

    def is_finished(self) -> bool:
        return self._index >= len(self.commands)

    def end(self, interrupted: bool) -> None:
        command = self.current
        if interrupted and command is not None:
            command.end(True)
        self._index = len(self.commands)
