#!/usr/bin/env python3
"""
Socket.IO console client for the bingo server.

Connects to the server, registers a player in a theme room and prints every
leaderboard update. Handy for checking the realtime flow without a browser.

Usage:
    python bingo_client.py http://localhost:3001 <theme_id> <name>

Commands:
    mark <n>   - Mark or unmark cell n (0-8)
    reset      - Clear the board
    board      - Show the board
    themes     - List available themes
    quit       - Leave
"""

import json
import sys
import uuid
from typing import Dict, List, Optional, Set

import requests
import socketio

LINES = {
    'horizontal': [(0, 1, 2), (3, 4, 5), (6, 7, 8)],
    'vertical': [(0, 3, 6), (1, 4, 7), (2, 5, 8)],
    'diagonal': [(0, 4, 8), (2, 4, 6)],
}


class BingoSocketIOClient:
    """Socket.IO client for the bingo server."""

    def __init__(self, server_url: str, room_id: str, name: str):
        self.server_url = server_url.rstrip('/')
        self.room_id = room_id
        self.name = name
        self.player_id = uuid.uuid4().hex[:8]
        self.words: List[str] = []
        self.marked: Set[int] = set()
        self.sio = socketio.Client()
        self.setup_socketio_handlers()

    def setup_socketio_handlers(self):
        """Set up Socket.IO event handlers."""

        @self.sio.on('connect')
        def on_connect():
            print("🔌 Connected")
            self.send({'type': 'join', 'roomId': self.room_id})
            self.send({'type': 'register', 'roomId': self.room_id,
                       'playerId': self.player_id, 'name': self.name})

        @self.sio.on('disconnect')
        def on_disconnect(*args):
            print("🔌 Disconnected")

        @self.sio.on('message')
        def on_message(text):
            message = json.loads(text)
            if message.get('type') == 'leaderboard':
                self.display_leaderboard(message['data'])

    def send(self, message: Dict):
        self.sio.send(json.dumps(message))

    def fetch_themes(self) -> Optional[Dict]:
        try:
            response = requests.get(f"{self.server_url}/api/themes")
            response.raise_for_status()
            return response.json()
        except requests.RequestException as e:
            print(f"✗ Could not fetch themes: {e}")
            return None

    def completed_lines(self) -> Dict[str, List[int]]:
        return {
            kind: [i for i, cells in enumerate(lines) if all(c in self.marked for c in cells)]
            for kind, lines in LINES.items()
        }

    def send_update(self):
        rows = self.completed_lines()
        line_count = sum(len(v) for v in rows.values())
        self.send({
            'type': 'update',
            'playerId': self.player_id,
            'score': len(self.marked) + 3 * line_count,
            'bingo': line_count > 0,
            'rows': rows,
        })

    def display_board(self):
        for start in (0, 3, 6):
            cells = []
            for i in range(start, start + 3):
                mark = '[x]' if i in self.marked else '[ ]'
                cells.append(f"{i} {mark} {self.words[i]:<20}")
            print("  ".join(cells))

    def display_leaderboard(self, entries: List[Dict]):
        print("\n🏆 Leaderboard")
        for rank, entry in enumerate(entries, 1):
            flag = " 🎉 BINGO" if entry['bingo'] else ""
            me = " (you)" if entry['id'] == self.player_id else ""
            print(f"  {rank:>2}. {entry['name']}{me}: {entry['score']}{flag}")

    def run(self):
        themes = self.fetch_themes()
        if themes is None:
            return
        if self.room_id not in themes:
            print(f"✗ Unknown theme '{self.room_id}'. Available: {', '.join(themes)}")
            return
        self.words = themes[self.room_id]['words']

        try:
            self.sio.connect(self.server_url)
        except socketio.exceptions.ConnectionError as e:
            print(f"✗ Socket.IO connection failed: {e}")
            return

        self.display_board()
        try:
            while True:
                line = input("> ").strip()
                if not line:
                    continue
                command, *args = line.split()
                if command == 'quit':
                    break
                elif command == 'board':
                    self.display_board()
                elif command == 'themes':
                    for theme_id, theme in (self.fetch_themes() or {}).items():
                        print(f"  {theme_id}: {theme['title']}")
                elif command == 'reset':
                    self.marked.clear()
                    self.send({'type': 'reset', 'playerId': self.player_id})
                elif command == 'mark' and args and args[0].isdigit() and int(args[0]) < 9:
                    self.marked ^= {int(args[0])}
                    self.send_update()
                    self.display_board()
                else:
                    print("Commands: mark <0-8>, reset, board, themes, quit")
        except (EOFError, KeyboardInterrupt):
            pass
        finally:
            self.sio.disconnect()


def main():
    if len(sys.argv) != 4:
        print(__doc__)
        sys.exit(1)
    BingoSocketIOClient(sys.argv[1], sys.argv[2], sys.argv[3]).run()


if __name__ == '__main__':
    main()
