from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated, Any, ClassVar, Optional, Protocol, runtime_checkable

import pytest

from syringe.container import Syringe
from syringe.exceptions import SyringeAssignmentError
from syringe.introspection import AnnotationIntrospector, DeclaredAttribute
from syringe.policies import AutowireType


class Engine:
    pass


class TurboEngine(Engine):
    pass


class Wheel:
    pass


class Car:
    engine: Engine | None = None
    spare: Wheel | None = None


class SportsCar(Car):
    turbo: TurboEngine | None = None


class Garage:
    first: Engine | None = None
    second: Wheel | None = None


class Dashboard:
    engine: ClassVar[Optional[Engine]] = None


class Tagged:
    engine: Annotated[Optional[Engine], "primary"] = None


class Vault:
    __engine: Engine | None = None

    def engine(self) -> Engine | None:
        return self.__engine


class Locked:
    engine: Engine | None = None

    def __setattr__(self, name: str, value: Any) -> None:
        msg = "locked"
        raise AttributeError(msg)


class ReadOnly:
    engine: Engine | None

    @property
    def engine(self) -> Engine | None:
        return None


@runtime_checkable
class Startable(Protocol):
    def start(self) -> None: ...


class Starter:
    def start(self) -> None:
        pass


class Greeter(Protocol):
    def greet(self) -> str: ...


class Plant:
    starter: Startable | None = None
    greeter: Greeter | None = None


class Base:
    engine: Engine | None = None


class Derived(Base):
    engine: TurboEngine | None = None


@dataclass(frozen=True)
class FrozenCar:
    engine: Engine | None = None


class RecordingIntrospector(AnnotationIntrospector):
    def __init__(self) -> None:
        super().__init__()
        self.writes: list[tuple[type[Any], object]] = []

    def write(self, instance: object, attribute: DeclaredAttribute, value: object) -> None:
        self.writes.append((attribute.declaring_type, value))
        super().write(instance, attribute, value)


def test_wires_attribute_by_name(container: Syringe) -> None:
    engine = Engine()
    container.register("engine", engine)
    car = Car()

    container.autowire(car)

    assert car.engine is engine


def test_by_name_falls_back_to_declared_type_name(container: Syringe) -> None:
    wheel = Wheel()
    container.register(wheel)
    car = Car()

    container.autowire(car, AutowireType.BY_NAME)

    assert car.spare is wheel


def test_by_name_prefers_name_over_type(container: Syringe) -> None:
    by_name = Engine()
    by_type = Engine()
    container.register("engine", by_name)
    container.register("Engine", by_type)
    car = Car()

    container.autowire(car)

    assert car.engine is by_name


def test_by_type_never_consults_attribute_name(container: Syringe) -> None:
    container.register("engine", Engine())
    car = Car()

    container.autowire(car, AutowireType.BY_TYPE)

    assert car.engine is None

    typed = Engine()
    container.register(typed)
    container.autowire(car, AutowireType.BY_TYPE)

    assert car.engine is typed


def test_strategy_accepts_enum_value(container: Syringe) -> None:
    engine = Engine()
    container.register(engine)
    car = Car()

    container.autowire(car, "by_type")  # type: ignore[arg-type]

    assert car.engine is engine


def test_unmatched_attribute_is_left_untouched(container: Syringe) -> None:
    car = Car()

    container.autowire(car)

    assert car.engine is None
    assert "engine" not in vars(car)


def test_inherited_attributes_are_wired(container: Syringe) -> None:
    engine = Engine()
    turbo = TurboEngine()
    wheel = Wheel()
    container.register("engine", engine)
    container.register("turbo", turbo)
    container.register(wheel)
    car = SportsCar()

    container.autowire(car)

    assert car.engine is engine
    assert car.turbo is turbo
    assert car.spare is wheel


def test_subclass_instance_is_compatible_with_declared_type(container: Syringe) -> None:
    turbo = TurboEngine()
    container.register("engine", turbo)
    car = Car()

    container.autowire(car)

    assert car.engine is turbo


def test_populated_attribute_is_kept(container: Syringe) -> None:
    own = Engine()
    container.register("engine", Engine())
    car = Car()
    car.engine = own

    container.autowire(car)

    assert car.engine is own


def test_overwrite_replaces_populated_attribute() -> None:
    container = Syringe(overwrite=True)
    registered = Engine()
    container.register("engine", registered)
    car = Car()
    car.engine = Engine()

    container.autowire(car)

    assert car.engine is registered


def test_incompatible_match_raises_assignment_error(container: Syringe) -> None:
    container.register("engine", Wheel())
    car = Car()

    with pytest.raises(SyringeAssignmentError) as exc_info:
        container.autowire(car)

    assert exc_info.value.key == "engine"
    assert exc_info.value.attribute == "engine"
    assert exc_info.value.instance is car
    assert car.engine is None


def test_incompatible_type_fallback_raises_assignment_error(container: Syringe) -> None:
    container.register("Wheel", Engine())

    with pytest.raises(SyringeAssignmentError) as exc_info:
        container.autowire(Car())

    assert exc_info.value.key == "Wheel"
    assert exc_info.value.attribute == "spare"


def test_assignment_error_stops_wiring_of_the_instance(container: Syringe) -> None:
    container.register("first", Wheel())
    container.register("second", Wheel())
    garage = Garage()

    with pytest.raises(SyringeAssignmentError):
        container.autowire(garage)

    assert garage.second is None


def test_class_var_annotations_are_not_wired(container: Syringe) -> None:
    container.register("engine", Engine())
    dashboard = Dashboard()

    container.autowire(dashboard)

    assert "engine" not in vars(dashboard)
    assert Dashboard.engine is None


def test_annotated_optional_is_wired_by_inner_type(container: Syringe) -> None:
    engine = Engine()
    container.register(engine)
    tagged = Tagged()

    container.autowire(tagged)

    assert tagged.engine is engine


def test_private_attribute_is_wired_by_type(container: Syringe) -> None:
    engine = Engine()
    container.register(engine)
    vault = Vault()

    container.autowire(vault)

    assert vault.engine() is engine


def test_custom_setattr_is_bypassed(container: Syringe) -> None:
    engine = Engine()
    container.register("engine", engine)
    locked = Locked()

    container.autowire(locked)

    assert locked.engine is engine


def test_frozen_dataclass_is_wired(container: Syringe) -> None:
    engine = Engine()
    container.register("engine", engine)
    car = FrozenCar()

    container.autowire(car)

    assert car.engine is engine


def test_read_only_attribute_raises_assignment_error(container: Syringe) -> None:
    container.register("engine", Engine())

    with pytest.raises(SyringeAssignmentError) as exc_info:
        container.autowire(ReadOnly())

    assert isinstance(exc_info.value.__cause__, AttributeError)


def test_runtime_checkable_protocol_is_checked(container: Syringe) -> None:
    container.register("starter", Wheel())

    with pytest.raises(SyringeAssignmentError):
        container.autowire(Plant())

    starter = Starter()
    container.register("starter", starter)
    plant = Plant()
    container.autowire(plant)

    assert plant.starter is starter


def test_plain_protocol_accepts_any_instance(container: Syringe) -> None:
    greeter = Wheel()
    container.register("greeter", greeter)
    plant = Plant()

    container.autowire(plant)

    assert plant.greeter is greeter


def test_shadowed_attribute_is_visited_once_per_declaring_class() -> None:
    introspector = RecordingIntrospector()
    container = Syringe(introspector=introspector, overwrite=True)
    turbo = TurboEngine()
    container.register("engine", turbo)

    container.autowire(Derived())

    assert introspector.writes == [(Derived, turbo), (Base, turbo)]


def test_shadowed_attribute_is_wired_once_when_keeping_populated_values() -> None:
    introspector = RecordingIntrospector()
    container = Syringe(introspector=introspector)
    turbo = TurboEngine()
    container.register("engine", turbo)
    derived = Derived()

    container.autowire(derived)

    assert derived.engine is turbo
    assert introspector.writes == [(Derived, turbo)]


def test_shadowed_attribute_checks_each_declared_type(container: Syringe) -> None:
    container.register("engine", Engine())

    with pytest.raises(SyringeAssignmentError):
        container.autowire(Derived())


def test_unresolvable_optional_annotation_is_wired_by_type_name(container: Syringe) -> None:
    class LocalEngine:
        pass

    class Holder:
        engine: Optional[LocalEngine] = None

    engine = LocalEngine()
    container.register(engine)

    holder = Holder()
    container.autowire(holder)

    assert holder.engine is engine


def test_unresolvable_annotated_and_generic_annotations_are_wired(container: Syringe) -> None:
    class LocalEngine:
        pass

    class LocalBox:
        pass

    class Holder:
        motor: Annotated[LocalEngine, "primary"] = None
        box: Optional[LocalBox[int]] = None

    engine = LocalEngine()
    box = LocalBox()
    container.register(engine)
    container.register(box)

    holder = Holder()
    container.autowire(holder, AutowireType.BY_TYPE)

    assert holder.motor is engine
    assert holder.box is box


def test_attributes_assigned_only_in_init_are_not_wired(container: Syringe) -> None:
    class Service:
        def __init__(self) -> None:
            self.engine = None

    container.register("engine", Engine())

    service = Service()
    container.autowire(service)

    assert service.engine is None
