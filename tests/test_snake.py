"""Tests for the Snake module."""

import pytest

from neon_snake.snake import Direction, Snake


class TestDirection:
    @pytest.mark.parametrize(
        ("a", "b"),
        [
            (Direction.UP, Direction.DOWN),
            (Direction.DOWN, Direction.UP),
            (Direction.LEFT, Direction.RIGHT),
            (Direction.RIGHT, Direction.LEFT),
        ],
    )
    def test_opposites(self, a, b):
        assert a.is_opposite(b)

    def test_perpendicular_and_same_are_not_opposite(self):
        assert not Direction.UP.is_opposite(Direction.LEFT)
        assert not Direction.UP.is_opposite(Direction.UP)

    def test_up_decreases_y(self):
        assert Direction.UP.value == (0, -1)


class TestSnakeInit:
    def test_body_order(self):
        snake = Snake([(10, 10), (10, 11), (10, 12)])
        assert snake.head == (10, 10)
        assert snake.tail == (10, 12)
        assert len(snake) == 3
        assert snake.direction == Direction.UP

    def test_minimum_length(self):
        with pytest.raises(ValueError, match="at least 1"):
            Snake([])

    def test_segments_become_tuples(self):
        snake = Snake([[1, 2]])
        assert snake.head == (1, 2)


class TestSnakeMovement:
    def test_next_head_uses_current_direction(self):
        snake = Snake([(5, 5), (5, 6)], Direction.UP)
        assert snake.next_head() == (5, 4)

    def test_next_head_with_explicit_direction(self):
        snake = Snake([(5, 5), (5, 6)], Direction.UP)
        assert snake.next_head(Direction.RIGHT) == (6, 5)
        assert snake.direction == Direction.UP
