"""Tests for materials: scatter rules, dispatch and serialization."""

import math

import pytest


class TestAbsorberAndMirror:
    """Test the absorbing and reflecting materials."""

    def test_absorber_terminates(self):
        from raysketch.core.vector import Vector
        from raysketch.materials import AbsorberMaterial, scatter

        assert scatter(AbsorberMaterial(), Vector(1, 0), Vector(-1, 0)) is None

    def test_mirror_reflects(self):
        from raysketch.core.vector import Vector
        from raysketch.materials import scatter_mirror

        assert scatter_mirror(Vector(1, 1), Vector(-1, 0)).is_close(Vector(-1, 1).normalized())

    def test_mirror_ignores_normal_orientation(self):
        from raysketch.core.vector import Vector
        from raysketch.materials import scatter_mirror

        a = scatter_mirror(Vector(0.6, 0.8), Vector(0, 1))
        b = scatter_mirror(Vector(0.6, 0.8), Vector(0, -1))
        assert a.is_close(b)

    def test_mirror_output_is_unit(self):
        from raysketch.core.vector import Vector
        from raysketch.materials import scatter_mirror

        assert scatter_mirror(Vector(3, 4), Vector(0, 2)).magnitude == pytest.approx(1.0)


class TestRefractive:
    """Test lens deflection."""

    def test_invalid_index_rejected(self):
        from raysketch.materials import RefractiveMaterial

        with pytest.raises(ValueError):
            RefractiveMaterial(ior=0.0)

    def test_head_on_ray_is_not_deflected(self):
        from raysketch.core.vector import Vector
        from raysketch.materials import scatter_refractive

        # Outward normal of a circle hit from its left side
        assert scatter_refractive(Vector(1, 0), Vector(-1, 0)).is_close(Vector(1, 0))

    def test_deflection_angle_follows_snell(self):
        from raysketch.core.vector import Vector
        from raysketch.materials import deflection_angle

        angle = deflection_angle(Vector(1, 0), Vector.from_angle(math.radians(30)), ior=1.46)
        assert angle == pytest.approx(math.asin(0.5 / 1.46))

    def test_deflection_sign_follows_incidence_side(self):
        from raysketch.core.vector import Vector
        from raysketch.materials import deflection_angle

        above = deflection_angle(Vector(1, 0), Vector.from_angle(math.radians(30)))
        below = deflection_angle(Vector(1, 0), Vector.from_angle(math.radians(-30)))
        assert above == pytest.approx(-below)

    def test_oblique_ray_is_rotated(self):
        from raysketch.core.vector import Vector
        from raysketch.materials import deflection_angle, scatter_refractive

        incident = Vector(1, 0)
        normal = Vector.from_angle(math.radians(150))
        out = scatter_refractive(incident, normal)

        expected = deflection_angle(incident, -normal)
        assert out.magnitude == pytest.approx(1.0)
        assert incident.angle_between(out) == pytest.approx(expected)

    def test_critical_angle(self):
        from raysketch.materials import critical_angle

        assert critical_angle(1.46) == pytest.approx(math.asin(1 / 1.46))
        with pytest.raises(ValueError):
            critical_angle(1.0, 1.33)


class TestFresnel:
    """Test the collimating Fresnel material."""

    def test_collimated_direction_is_reversed_normal(self):
        from raysketch.core.vector import Vector
        from raysketch.materials import collimated_direction

        assert collimated_direction(Vector(0, 1)).is_close(Vector(0, -1))

    def test_rays_from_front_are_collimated(self):
        from raysketch.core.vector import Vector
        from raysketch.materials import scatter_fresnel

        for incident in (Vector(0, -1), Vector(0.6, -0.8), Vector(-0.6, -0.8)):
            assert scatter_fresnel(incident, Vector(0, 1)).is_close(Vector(0, -1))

    def test_rays_from_back_are_absorbed(self):
        from raysketch.core.vector import Vector
        from raysketch.materials import scatter_fresnel

        assert scatter_fresnel(Vector(0.6, 0.8), Vector(0, 1)) is None

    def test_custom_reflection_angle(self):
        from raysketch.core.vector import Vector
        from raysketch.materials import scatter_fresnel

        out = scatter_fresnel(Vector(1, 0.1), Vector(0, 1), reflection_angle=-90.0)
        assert out.is_close(Vector(1, 0))


class TestMaterialDispatch:
    """Test MaterialType mapping and serialization."""

    def test_material_type(self):
        from raysketch.materials import (
            AbsorberMaterial,
            FresnelMaterial,
            MaterialType,
            MirrorMaterial,
            RefractiveMaterial,
            material_type,
        )

        assert material_type(AbsorberMaterial()) is MaterialType.ABSORB
        assert material_type(MirrorMaterial()) is MaterialType.MIRROR
        assert material_type(RefractiveMaterial()) is MaterialType.REFRACT
        assert material_type(FresnelMaterial()) is MaterialType.COLLIMATE

    def test_make_material(self):
        from raysketch.materials import MaterialType, RefractiveMaterial, make_material

        assert make_material(MaterialType.REFRACT, ior=1.33) == RefractiveMaterial(ior=1.33)

    def test_to_dict(self):
        from raysketch.materials import RefractiveMaterial, material_to_dict

        assert material_to_dict(RefractiveMaterial()) == {
            "type": "refract",
            "ior": 1.46,
            "exterior_ior": 1.0,
        }

    def test_dict_round_trip(self):
        from raysketch.materials import FresnelMaterial, material_from_dict, material_to_dict

        material = FresnelMaterial(reflection_angle=90.0)
        assert material_from_dict(material_to_dict(material)) == material

    def test_unknown_type(self):
        from raysketch.materials import material_from_dict

        with pytest.raises(ValueError):
            material_from_dict({"type": "lambertian"})

    def test_scatter_unknown_material(self):
        from raysketch.core.vector import Vector
        from raysketch.materials import scatter

        with pytest.raises(TypeError):
            scatter(object(), Vector(1, 0), Vector(0, 1))  # type: ignore[arg-type]
