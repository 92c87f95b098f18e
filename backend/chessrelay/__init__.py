"""Пейринг двух игроков в комнату и ретрансляция ходов."""
